# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - media.py: resolve/URL responses, asset registration, links, placeholder
#   and duplicate reports
#
# These models define the "contract" between API and clients.
# =============================================================================

from .media import (
    AssetList,
    AssetResponse,
    DeleteAssetResponse,
    DimensionsSchema,
    DuplicateConflictSchema,
    DuplicateLocationSchema,
    DuplicateReport,
    LinkRequest,
    LinkResponse,
    PlaceholderResponse,
    PlacementResponse,
    RegisterAssetRequest,
    ResolveResponse,
    SourceSetItem,
    UrlResponse,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    "AssetList",
    "AssetResponse",
    "DeleteAssetResponse",
    "DimensionsSchema",
    "DuplicateConflictSchema",
    "DuplicateLocationSchema",
    "DuplicateReport",
    "LinkRequest",
    "LinkResponse",
    "PlaceholderResponse",
    "PlacementResponse",
    "RegisterAssetRequest",
    "ResolveResponse",
    "SourceSetItem",
    "UrlResponse",
]
