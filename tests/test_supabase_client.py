# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# The singleton client is replaced with a MagicMock, so these tests check
# query construction and error translation without a network.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.config import settings
from lib.supabase_client import (
    ASSETS_TABLE,
    LINKS_TABLE,
    PLACEHOLDERS_TABLE,
    SupabaseClient,
    SupabaseClientError,
)
from media.errors import MediaStoreError


@pytest.fixture
def mock_client(monkeypatch):
    """Install a MagicMock as the singleton Supabase client."""
    client = MagicMock()
    monkeypatch.setattr(SupabaseClient, "_instance", client)
    return client


def _table(client):
    return client.table.return_value


class TestGetClient:

    def test_creates_once(self, monkeypatch):
        monkeypatch.setattr(SupabaseClient, "_instance", None)

        with patch("lib.supabase_client.create_client") as create:
            first = SupabaseClient.get_client()
            second = SupabaseClient.get_client()

        create.assert_called_once()
        assert first is second

    def test_creation_failure(self, monkeypatch):
        monkeypatch.setattr(SupabaseClient, "_instance", None)

        with patch("lib.supabase_client.create_client", side_effect=ValueError("bad url")):
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.get_client()

        assert exc_info.value.code == "CLIENT_INIT_FAILED"

    def test_missing_credentials(self, monkeypatch):
        # Arrange
        monkeypatch.setattr(SupabaseClient, "_instance", None)
        monkeypatch.setattr(settings, "SUPABASE_URL", "")

        # Act
        with patch("lib.supabase_client.create_client") as create:
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.get_client()

        # Assert
        assert exc_info.value.code == "CLIENT_NOT_CONFIGURED"
        assert exc_info.value.status_code == 503
        create.assert_not_called()


class TestFetch:

    def test_fetch_link(self, mock_client):
        # Arrange
        chain = _table(mock_client).select.return_value.eq.return_value.single.return_value
        chain.execute.return_value = MagicMock(data={"placeholder_id": "p", "public_id": "hero/a"})

        # Act
        row = SupabaseClient.fetch_placeholder_link("p")

        # Assert
        mock_client.table.assert_called_with(LINKS_TABLE)
        _table(mock_client).select.return_value.eq.assert_called_with("placeholder_id", "p")
        assert row["public_id"] == "hero/a"

    def test_no_rows_is_none(self, mock_client):
        chain = _table(mock_client).select.return_value.eq.return_value.single.return_value
        chain.execute.side_effect = Exception("{'code': 'PGRST116', 'message': 'no rows'}")

        assert SupabaseClient.fetch_asset("hero/a") is None

    def test_other_errors_raise(self, mock_client):
        chain = _table(mock_client).select.return_value.eq.return_value.single.return_value
        chain.execute.side_effect = Exception("connection reset")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_asset("hero/a")

        assert isinstance(exc_info.value, MediaStoreError)
        assert exc_info.value.status_code == 503
        assert exc_info.value.details["table"] == ASSETS_TABLE


class TestAssets:

    def test_upsert_returns_row(self, mock_client):
        upsert = _table(mock_client).upsert
        upsert.return_value.execute.return_value = MagicMock(data=[{"public_id": "hero/a"}])

        row = SupabaseClient.upsert_asset({"public_id": "hero/a"})

        assert row == {"public_id": "hero/a"}
        sent, = upsert.call_args.args
        assert "updated_at" in sent
        assert upsert.call_args.kwargs == {"on_conflict": "public_id"}

    def test_upsert_without_data(self, mock_client):
        _table(mock_client).upsert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.upsert_asset({"public_id": "hero/a"})

        assert exc_info.value.code == "UPSERT_NO_DATA"

    def test_list_pages_with_range(self, mock_client):
        query = _table(mock_client).select.return_value
        query.order.return_value.range.return_value.execute.return_value = MagicMock(data=[{"public_id": "a"}])

        rows = SupabaseClient.list_assets(limit=10, offset=20)

        query.order.assert_called_with("created_at", desc=True)
        query.order.return_value.range.assert_called_with(20, 29)
        assert rows == [{"public_id": "a"}]

    def test_delete_reports_match(self, mock_client):
        _table(mock_client).delete.return_value.eq.return_value.execute.return_value = MagicMock(data=[])

        assert SupabaseClient.delete_asset("hero/a") is False


class TestLinks:

    def test_rename_moves_row(self, mock_client):
        update = _table(mock_client).update
        update.return_value.eq.return_value.execute.return_value = MagicMock(data=[{"placeholder_id": "new"}])

        assert SupabaseClient.rename_placeholder_link("old", "new") is True
        update.return_value.eq.assert_called_with("placeholder_id", "old")
        assert update.call_args.args[0]["placeholder_id"] == "new"

    def test_rename_without_link(self, mock_client):
        _table(mock_client).update.return_value.eq.return_value.execute.return_value = MagicMock(data=[])

        assert SupabaseClient.rename_placeholder_link("old", "new") is False

    def test_upsert_link_omits_empty_area(self, mock_client):
        upsert = _table(mock_client).upsert
        upsert.return_value.execute.return_value = MagicMock(data=[{"placeholder_id": "p"}])

        SupabaseClient.upsert_placeholder_link("p", "hero/a")

        assert "area" not in upsert.call_args.args[0]

    def test_delete_links_for_asset_counts(self, mock_client):
        chain = _table(mock_client).delete.return_value.eq.return_value
        chain.execute.return_value = MagicMock(data=[{}, {}])

        assert SupabaseClient.delete_links_for_asset("hero/a") == 2


class TestPlaceholders:

    def test_upsert_empty_skips_query(self, mock_client):
        assert SupabaseClient.upsert_placeholders([]) == 0
        mock_client.table.assert_not_called()

    def test_upsert_failure(self, mock_client):
        _table(mock_client).upsert.return_value.execute.side_effect = Exception("timeout")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.upsert_placeholders([{"id": "a"}])

        assert exc_info.value.details == {"count": 1, "first_id": "a"}
        mock_client.table.assert_called_with(PLACEHOLDERS_TABLE)

    def test_check_table_failure(self, mock_client):
        _table(mock_client).select.return_value.limit.return_value.execute.side_effect = Exception("down")

        with pytest.raises(SupabaseClientError):
            SupabaseClient.check_table(ASSETS_TABLE)
