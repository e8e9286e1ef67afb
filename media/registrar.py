# =============================================================================
# media/registrar.py - Asset Registrar
# =============================================================================
# Write path for the persisted mapping:
# - register(): idempotent upsert of a media_assets row keyed by public_id
# - link()/unlink(): the separate, explicit placeholder -> asset step
# - delete_asset(): refuses while links exist unless cascade=True
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from media.errors import (
    AssetInUseError,
    AssetNotFoundError,
    InvalidReferenceError,
    MediaStoreError,
    StoreUnavailableError,
)
from media.placements import to_area
from media.store import MediaStore
from media.types import MediaArea, PhysicalAsset, PlaceholderAssetLink, ResourceType
from media.urls import detect_resource_type

logger = logging.getLogger(__name__)


def _require_id(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidReferenceError(
            f"{name} must be a non-empty string",
            details={name: value},
        )
    return value.strip()


class AssetRegistrar:
    """
    Persist uploaded assets and their placeholder links.

    Registering an asset never links it: "an asset exists" and "a placeholder
    points at it" are separate facts.
    """

    def __init__(self, store: MediaStore):
        self.store = store

    def register(self, public_id: str, metadata: dict[str, Any] | None = None) -> PhysicalAsset:
        """
        Insert or update the asset row for public_id.

        Re-registering replaces the stored metadata with the new values, so
        calling this twice with the same arguments leaves one identical row.

        Args:
            public_id: Cloudinary public ID produced by the upload
            metadata: title, alt_text, tags, width, height, resource_type, ...

        Returns:
            The stored PhysicalAsset

        Raises:
            InvalidReferenceError: Empty public_id or bad resource_type
            StoreUnavailableError: The upsert failed
        """
        public_id = _require_id("public_id", public_id).lstrip("/")
        metadata = dict(metadata or {})

        declared_type = metadata.pop("resource_type", None)
        if declared_type is None:
            resource_type = detect_resource_type(public_id)
        else:
            try:
                resource_type = ResourceType(declared_type)
            except ValueError:
                raise InvalidReferenceError(
                    f"Invalid resource_type: {declared_type!r}",
                    details={"resource_type": declared_type},
                ) from None

        asset = PhysicalAsset(public_id=public_id, resource_type=resource_type, metadata=metadata)

        try:
            existing = self.store.fetch_asset(public_id)
            row = self.store.upsert_asset(asset.to_db_row())
        except MediaStoreError as e:
            logger.error(f"Failed to register asset {public_id}: {e.message}")
            raise StoreUnavailableError("register", e.message) from e

        logger.info(f"{'Updated' if existing else 'Registered'} asset: {public_id}")
        return PhysicalAsset.from_db_row(row)

    def get_asset(self, public_id: str) -> PhysicalAsset:
        """Fetch one registered asset or raise AssetNotFoundError."""
        public_id = _require_id("public_id", public_id)
        try:
            row = self.store.fetch_asset(public_id)
        except MediaStoreError as e:
            raise StoreUnavailableError("fetch_asset", e.message) from e
        if not row:
            raise AssetNotFoundError(public_id)
        return PhysicalAsset.from_db_row(row)

    def list_assets(
        self,
        limit: int = 50,
        offset: int = 0,
        resource_type: ResourceType | str | None = None,
    ) -> list[PhysicalAsset]:
        """Page through registered assets, newest first."""
        kind = ResourceType(resource_type).value if resource_type else None
        try:
            rows = self.store.list_assets(limit=limit, offset=offset, resource_type=kind)
        except MediaStoreError as e:
            raise StoreUnavailableError("list_assets", e.message) from e
        return [PhysicalAsset.from_db_row(row) for row in rows]

    def list_links(self) -> list[PlaceholderAssetLink]:
        """Every placeholder -> asset link."""
        try:
            rows = self.store.list_placeholder_links()
        except MediaStoreError as e:
            raise StoreUnavailableError("list_links", e.message) from e
        return [PlaceholderAssetLink.from_db_row(row) for row in rows]

    def link(
        self,
        placeholder_id: str,
        public_id: str,
        area: MediaArea | str | None = None,
    ) -> PlaceholderAssetLink:
        """
        Point a placeholder at a public ID, replacing any previous link.

        The asset does not need to be registered first; unregistered public
        IDs still resolve, just without stored metadata.
        """
        placeholder_id = _require_id("placeholder_id", placeholder_id)
        public_id = _require_id("public_id", public_id).lstrip("/")
        area_value = to_area(area).value if area is not None else None

        try:
            row = self.store.upsert_placeholder_link(placeholder_id, public_id, area_value)
        except MediaStoreError as e:
            logger.error(f"Failed to link {placeholder_id} -> {public_id}: {e.message}")
            raise StoreUnavailableError("link", e.message) from e

        logger.info(f"Linked placeholder {placeholder_id} -> {public_id}")
        return PlaceholderAssetLink.from_db_row(row)

    def unlink(self, placeholder_id: str) -> bool:
        """Remove a placeholder's link. Returns False if there was none."""
        placeholder_id = _require_id("placeholder_id", placeholder_id)
        try:
            removed = self.store.delete_placeholder_link(placeholder_id)
        except MediaStoreError as e:
            raise StoreUnavailableError("unlink", e.message) from e

        if removed:
            logger.info(f"Unlinked placeholder {placeholder_id}")
        return removed

    def delete_asset(self, public_id: str, cascade: bool = False) -> list[str]:
        """
        Delete an asset row.

        While links point at the asset the delete is refused, unless cascade
        is set, in which case the links are removed first and those
        placeholders fall through to the fallback table or NotFound.

        Returns:
            Placeholder IDs whose links were removed

        Raises:
            AssetNotFoundError: No row for public_id
            AssetInUseError: Links exist and cascade is False
            StoreUnavailableError: Any store failure
        """
        public_id = _require_id("public_id", public_id)
        try:
            if not self.store.fetch_asset(public_id):
                raise AssetNotFoundError(public_id)

            linked = [row["placeholder_id"] for row in self.store.fetch_links_for_asset(public_id)]
            if linked and not cascade:
                raise AssetInUseError(public_id, linked)
            if linked:
                self.store.delete_links_for_asset(public_id)
                logger.info(f"Removed {len(linked)} link(s) to {public_id}: {linked}")

            self.store.delete_asset(public_id)
        except MediaStoreError as e:
            logger.error(f"Failed to delete asset {public_id}: {e.message}")
            raise StoreUnavailableError("delete_asset", e.message) from e

        logger.info(f"Deleted asset: {public_id}")
        return linked
