# =============================================================================
# media/resolver.py - Reference Resolver
# =============================================================================
# Maps a logical placeholder ID to a physical asset. Resolution order,
# short-circuiting on the first match:
#
#   1. ID contains "/"          -> already physical, no lookup
#   2. persisted link row       -> canonical admin-assigned asset
#   3. static fallback table    -> legacy compatibility shim
#   4. otherwise                -> NotFound (a value, not an exception)
#
# A store failure raises StoreUnavailableError so "system degraded" is never
# mistaken for "this content has no image". Nothing is cached: every call is
# a fresh lookup.
# =============================================================================

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from media.errors import InvalidReferenceError, MediaStoreError, StoreUnavailableError
from media.fallbacks import DEFAULT_FALLBACKS
from media.store import MediaStore
from media.types import (
    NotFound,
    PhysicalAsset,
    ResolutionSource,
    ResolvedAsset,
    ResolveResult,
)
from media.urls import detect_resource_type

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


class ReferenceResolver:
    """
    Resolve placeholder IDs against the store, then the fallback table.

    Example:
        resolver = ReferenceResolver(SupabaseClient, fallbacks={"old-hero": "hero/old"})
        result = resolver.resolve("home-hero")
        if result:
            url = build_url(result.public_id, resource_type=result.resource_type)
    """

    def __init__(
        self,
        store: MediaStore,
        fallbacks: Mapping[str, str] | None = None,
    ):
        self.store = store
        self.fallbacks: Mapping[str, str] = DEFAULT_FALLBACKS if fallbacks is None else fallbacks

    def resolve(self, placeholder_id: str) -> ResolveResult:
        """
        Resolve one placeholder ID.

        Returns:
            ResolvedAsset (truthy) tagged with its ResolutionSource, or
            NotFound (falsy) when no path produced an asset

        Raises:
            InvalidReferenceError: Empty or non-string ID
            StoreUnavailableError: The link lookup failed
        """
        if not isinstance(placeholder_id, str) or not placeholder_id.strip():
            raise InvalidReferenceError(
                "placeholder_id must be a non-empty string",
                details={"placeholder_id": placeholder_id},
            )
        placeholder_id = placeholder_id.strip()

        # 1. Physical IDs passed through a logical-ID parameter
        if PATH_SEPARATOR in placeholder_id:
            return ResolvedAsset(
                public_id=placeholder_id,
                resource_type=detect_resource_type(placeholder_id),
                placeholder_id=placeholder_id,
                source=ResolutionSource.DIRECT,
            )

        # 2. Persisted link
        linked = self._resolve_link(placeholder_id)
        if linked is not None:
            return linked

        # 3. Compatibility table
        fallback_id = self.fallbacks.get(placeholder_id)
        if fallback_id:
            logger.info(
                f"Resolved {placeholder_id} via fallback table to {fallback_id}; "
                f"assign a link to retire the fallback"
            )
            return ResolvedAsset(
                public_id=fallback_id,
                resource_type=detect_resource_type(fallback_id),
                placeholder_id=placeholder_id,
                source=ResolutionSource.FALLBACK,
            )

        # 4. Nothing
        logger.debug(f"No asset for placeholder {placeholder_id}")
        return NotFound(placeholder_id)

    def resolve_many(self, placeholder_ids: Iterable[str]) -> dict[str, ResolveResult]:
        """Resolve several IDs; same rules as resolve(), one lookup each."""
        return {pid: self.resolve(pid) for pid in placeholder_ids}

    def _resolve_link(self, placeholder_id: str) -> ResolvedAsset | None:
        try:
            link = self.store.fetch_placeholder_link(placeholder_id)
            if not link or not link.get("public_id"):
                return None
            asset_row = self.store.fetch_asset(link["public_id"])
        except MediaStoreError as e:
            logger.error(f"Link lookup failed for {placeholder_id}: {e.message}")
            raise StoreUnavailableError("resolve", e.message) from e

        public_id = link["public_id"]
        if asset_row:
            asset = PhysicalAsset.from_db_row(asset_row)
        else:
            # Linked but never registered: still deliverable by public ID
            asset = PhysicalAsset(public_id=public_id, resource_type=detect_resource_type(public_id))

        return ResolvedAsset(
            public_id=public_id,
            resource_type=asset.resource_type,
            metadata=asset.metadata,
            created_at=asset.created_at,
            updated_at=asset.updated_at,
            placeholder_id=placeholder_id,
            source=ResolutionSource.LINK,
        )
