# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the media tables in Supabase.
# It implements the singleton pattern to reuse a single client connection
# and satisfies media.store.MediaStore:
# - media_assets: registered Cloudinary assets and their metadata
# - media_placeholder_links: placeholder -> public_id assignments
# - media_placeholders: placeholders discovered from the site's pages
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   link = SupabaseClient.fetch_placeholder_link("home-hero-image")
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import create_client, Client

from app.config import settings
from media.errors import MediaStoreError

# Set up logging for this module
logger = logging.getLogger(__name__)

ASSETS_TABLE = "media_assets"
LINKS_TABLE = "media_placeholder_links"
PLACEHOLDERS_TABLE = "media_placeholders"

# PostgREST code for "no rows" on .single()
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(MediaStoreError):
    """
    Error during Supabase operations.

    Components in the media package translate it into StoreUnavailableError.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=503,
            suggestion=suggestion,
            details=details,
        )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseClient:
    """
    Typed wrapper for the media tables.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods, so the class itself is
    passed wherever a MediaStore is expected.

    Example:
        row = SupabaseClient.fetch_asset("team/headshots/dr-smith")
        SupabaseClient.upsert_placeholder_link("team-dr-smith", "team/headshots/dr-smith")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If credentials are missing or client creation fails
        """
        if cls._instance is None:
            if not settings.supabase_configured:
                raise SupabaseClientError(
                    message="Supabase credentials are not configured",
                    code="CLIENT_NOT_CONFIGURED",
                    suggestion="Set SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _fetch_one(cls, table: str, column: str, value: str) -> dict[str, Any] | None:
        client = cls.get_client()
        try:
            response = (
                client.table(table)
                .select("*")
                .eq(column, value)
                .single()
                .execute()
            )
            return response.data
        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, column: value}
            )

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def check_table(cls, table: str) -> None:
        """Run a one-row select against a table; raises if it is unreachable."""
        client = cls.get_client()
        try:
            client.table(table).select("*").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Table {table} is not reachable: {e}",
                code="TABLE_CHECK_FAILED",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_asset(cls, public_id: str) -> dict[str, Any] | None:
        """
        Fetch a registered asset by public ID.

        Returns:
            media_assets row, or None if not registered

        Raises:
            SupabaseClientError: If query fails
        """
        return cls._fetch_one(ASSETS_TABLE, "public_id", public_id)

    @classmethod
    def upsert_asset(cls, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert or update an asset row keyed by public_id.

        Returns:
            The stored row

        Raises:
            SupabaseClientError: If the upsert fails or returns nothing
        """
        client = cls.get_client()
        data = {**row, "updated_at": _now()}

        try:
            response = (
                client.table(ASSETS_TABLE)
                .upsert(data, on_conflict="public_id")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert asset: {e}",
                code="UPSERT_ASSET_FAILED",
                details={"public_id": row.get("public_id")}
            )

        if not response.data:
            raise SupabaseClientError(
                message="Upsert returned no data",
                code="UPSERT_NO_DATA",
                details={"public_id": row.get("public_id")}
            )
        return response.data[0]

    @classmethod
    def list_assets(
        cls,
        limit: int = 50,
        offset: int = 0,
        resource_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List registered assets, newest first.

        Args:
            limit: Page size
            offset: Rows to skip
            resource_type: "image" or "video" to filter, None for both
        """
        client = cls.get_client()

        try:
            query = client.table(ASSETS_TABLE).select("*")
            if resource_type:
                query = query.eq("resource_type", resource_type)
            response = (
                query
                .order("created_at", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )
            assets = response.data or []
            logger.debug(f"Fetched {len(assets)} assets (offset={offset})")
            return assets

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list assets: {e}",
                code="LIST_ASSETS_FAILED",
                details={"limit": limit, "offset": offset}
            )

    @classmethod
    def delete_asset(cls, public_id: str) -> bool:
        """Delete an asset row. Returns False if no row matched."""
        client = cls.get_client()
        try:
            response = (
                client.table(ASSETS_TABLE)
                .delete()
                .eq("public_id", public_id)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete asset: {e}",
                code="DELETE_ASSET_FAILED",
                details={"public_id": public_id}
            )

    # -------------------------------------------------------------------------
    # Placeholder Links
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_placeholder_link(cls, placeholder_id: str) -> dict[str, Any] | None:
        """
        Fetch the link for a placeholder.

        Returns:
            media_placeholder_links row, or None if the placeholder is unlinked

        Raises:
            SupabaseClientError: If query fails
        """
        return cls._fetch_one(LINKS_TABLE, "placeholder_id", placeholder_id)

    @classmethod
    def fetch_links_for_asset(cls, public_id: str) -> list[dict[str, Any]]:
        """Every link pointing at public_id."""
        client = cls.get_client()
        try:
            response = (
                client.table(LINKS_TABLE)
                .select("*")
                .eq("public_id", public_id)
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch links for asset: {e}",
                code="FETCH_LINKS_FAILED",
                details={"public_id": public_id}
            )

    @classmethod
    def list_placeholder_links(cls) -> list[dict[str, Any]]:
        """All links, ordered by placeholder ID."""
        client = cls.get_client()
        try:
            response = (
                client.table(LINKS_TABLE)
                .select("*")
                .order("placeholder_id")
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list placeholder links: {e}",
                code="LIST_LINKS_FAILED",
            )

    @classmethod
    def upsert_placeholder_link(
        cls,
        placeholder_id: str,
        public_id: str,
        area: str | None = None,
    ) -> dict[str, Any]:
        """
        Create or re-point the link for a placeholder.

        placeholder_id is unique in the table, so a second call replaces the
        first link instead of adding another.
        """
        client = cls.get_client()
        data: dict[str, Any] = {
            "placeholder_id": placeholder_id,
            "public_id": public_id,
            "updated_at": _now(),
        }
        if area:
            data["area"] = area

        try:
            response = (
                client.table(LINKS_TABLE)
                .upsert(data, on_conflict="placeholder_id")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert placeholder link: {e}",
                code="UPSERT_LINK_FAILED",
                details={"placeholder_id": placeholder_id, "public_id": public_id}
            )

        if not response.data:
            raise SupabaseClientError(
                message="Upsert returned no data",
                code="UPSERT_NO_DATA",
                details={"placeholder_id": placeholder_id}
            )
        return response.data[0]

    @classmethod
    def delete_placeholder_link(cls, placeholder_id: str) -> bool:
        """Remove a placeholder's link. Returns False if there was none."""
        client = cls.get_client()
        try:
            response = (
                client.table(LINKS_TABLE)
                .delete()
                .eq("placeholder_id", placeholder_id)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete placeholder link: {e}",
                code="DELETE_LINK_FAILED",
                details={"placeholder_id": placeholder_id}
            )

    @classmethod
    def delete_links_for_asset(cls, public_id: str) -> int:
        """Remove every link to public_id. Returns how many were removed."""
        client = cls.get_client()
        try:
            response = (
                client.table(LINKS_TABLE)
                .delete()
                .eq("public_id", public_id)
                .execute()
            )
            return len(response.data or [])
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete links for asset: {e}",
                code="DELETE_LINKS_FAILED",
                details={"public_id": public_id}
            )

    @classmethod
    def rename_placeholder_link(cls, old_id: str, new_id: str) -> bool:
        """
        Re-key a link in place, keeping its public_id.

        Returns:
            True if a link row was moved, False if old_id had none
        """
        client = cls.get_client()
        try:
            response = (
                client.table(LINKS_TABLE)
                .update({"placeholder_id": new_id, "updated_at": _now()})
                .eq("placeholder_id", old_id)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to rename placeholder link: {e}",
                code="RENAME_LINK_FAILED",
                suggestion="Check that no link already exists for the new ID",
                details={"old_id": old_id, "new_id": new_id}
            )

    # -------------------------------------------------------------------------
    # Discovered Placeholders
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_all_placeholders(cls) -> list[dict[str, Any]]:
        """All rows of media_placeholders, ordered by page, section, id."""
        client = cls.get_client()
        try:
            response = (
                client.table(PLACEHOLDERS_TABLE)
                .select("*")
                .order("page")
                .order("section")
                .order("id")
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch placeholders: {e}",
                code="FETCH_PLACEHOLDERS_FAILED",
            )

    @classmethod
    def upsert_placeholders(cls, rows: list[dict[str, Any]]) -> int:
        """
        Upsert placeholder rows keyed by id.

        Returns:
            Number of rows written
        """
        if not rows:
            return 0

        client = cls.get_client()
        try:
            response = (
                client.table(PLACEHOLDERS_TABLE)
                .upsert(rows, on_conflict="id")
                .execute()
            )
            return len(response.data or [])
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert placeholders: {e}",
                code="UPSERT_PLACEHOLDERS_FAILED",
                details={"count": len(rows), "first_id": rows[0].get("id")}
            )
