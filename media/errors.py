# =============================================================================
# media/errors.py - Media Library Errors
# =============================================================================
# Error taxonomy for the resolution layer. "No asset for this placeholder" is
# NOT an error here: the resolver returns a NotFound value for that case.
# =============================================================================

from __future__ import annotations

from typing import Any

from lib.utils import ApplicationError


class InvalidReferenceError(ApplicationError):
    """Malformed input to the URL builder or resolver. Always a caller defect."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="INVALID_REFERENCE",
            status_code=400,
            suggestion="Pass a non-empty ID and option values from the documented sets",
            details=details,
        )


class StoreUnavailableError(ApplicationError):
    """
    The persisted mapping could not be read or written.

    Kept distinct from NotFound so logs can tell "no content" apart from
    "system degraded". The core never retries.
    """

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Media store unavailable during {operation}: {error}",
            code="STORE_UNAVAILABLE",
            status_code=503,
            suggestion="Check Supabase connectivity and credentials, then retry",
            details={"operation": operation, "error": error},
        )


class UnknownAreaError(ApplicationError, ValueError):
    """An area outside the placement registry. Raised at construction time."""

    def __init__(self, area: Any, known: list[str]):
        super().__init__(
            message=f"Unknown media area: {area!r}",
            code="UNKNOWN_AREA",
            status_code=400,
            suggestion=f"Use one of: {', '.join(known)}",
            details={"area": str(area), "known_areas": known},
        )


class AssetNotFoundError(ApplicationError):
    """Raised when an admin operation targets a public ID with no stored row."""

    def __init__(self, public_id: str):
        super().__init__(
            message=f"Asset not found: {public_id}",
            code="ASSET_NOT_FOUND",
            status_code=404,
            suggestion="Register the asset first or check the public_id spelling",
            details={"public_id": public_id},
        )


class AssetInUseError(ApplicationError):
    """Raised when deleting an asset that placeholders still link to."""

    def __init__(self, public_id: str, placeholder_ids: list[str]):
        super().__init__(
            message=f"Asset {public_id} is linked from {len(placeholder_ids)} placeholder(s)",
            code="ASSET_IN_USE",
            status_code=409,
            suggestion="Re-link or unlink those placeholders, or delete with cascade=true",
            details={"public_id": public_id, "placeholder_ids": placeholder_ids},
        )


class MediaStoreError(ApplicationError):
    """
    Base for failures raised by a MediaStore implementation.

    Components in this package translate it into StoreUnavailableError.
    """


class MediaMapError(ApplicationError):
    """The media map file is missing or not in the expected shape."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Invalid media map {path}: {error}",
            code="MEDIA_MAP_INVALID",
            status_code=500,
            suggestion="Regenerate the map with: python scripts/media_map.py generate",
            details={"path": path, "error": error},
        )
