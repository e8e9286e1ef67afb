# =============================================================================
# media/store.py - Persisted Mapping Boundary
# =============================================================================
# The relational store the resolver and registrar talk to. Rows are plain
# dicts shaped like the Supabase tables:
#
#   media_assets             public_id, resource_type, title, alt_text,
#                            width, height, tags, metadata, timestamps
#   media_placeholder_links  placeholder_id, public_id, area, timestamps
#   media_placeholders       id, name, description, area, page, section,
#                            dimensions
#
# lib.supabase_client.SupabaseClient is the production implementation.
# Every method raises MediaStoreError (or a subclass) on infrastructure
# failure; "no row" is None / an empty list, never an exception.
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol


class MediaStore(Protocol):
    """Operations the media layer needs from the store."""

    # Assets
    def fetch_asset(self, public_id: str) -> dict[str, Any] | None: ...

    def upsert_asset(self, row: dict[str, Any]) -> dict[str, Any]: ...

    def list_assets(
        self,
        limit: int = 50,
        offset: int = 0,
        resource_type: str | None = None,
    ) -> list[dict[str, Any]]: ...

    def delete_asset(self, public_id: str) -> bool: ...

    # Placeholder -> asset links
    def fetch_placeholder_link(self, placeholder_id: str) -> dict[str, Any] | None: ...

    def fetch_links_for_asset(self, public_id: str) -> list[dict[str, Any]]: ...

    def list_placeholder_links(self) -> list[dict[str, Any]]: ...

    def upsert_placeholder_link(
        self,
        placeholder_id: str,
        public_id: str,
        area: str | None = None,
    ) -> dict[str, Any]: ...

    def delete_placeholder_link(self, placeholder_id: str) -> bool: ...

    def delete_links_for_asset(self, public_id: str) -> int: ...

    def rename_placeholder_link(self, old_id: str, new_id: str) -> bool: ...

    # Discovered placeholders
    def fetch_all_placeholders(self) -> list[dict[str, Any]]: ...

    def upsert_placeholders(self, rows: list[dict[str, Any]]) -> int: ...
