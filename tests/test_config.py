# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest

from app.config import Settings


@pytest.fixture
def bare_env(monkeypatch):
    """Environment without store credentials."""
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)


class TestSettings:

    def test_loads_without_store_credentials(self, bare_env):
        # Act
        loaded = Settings(_env_file=None)

        # Assert
        assert loaded.SUPABASE_URL == ""
        assert not loaded.supabase_configured
        assert loaded.MEDIA_MAP_PATH == "data/media-map.json"
        assert loaded.PAGES_DIR == "site/pages"

    def test_configured_with_both_credentials(self, bare_env, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "key")

        assert Settings(_env_file=None).supabase_configured

    def test_url_alone_not_configured(self, bare_env, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")

        assert not Settings(_env_file=None).supabase_configured

    def test_map_paths_from_env(self, monkeypatch):
        monkeypatch.setenv("MEDIA_MAP_PATH", "/tmp/map.json")
        monkeypatch.setenv("PAGES_DIR", "/srv/pages")

        loaded = Settings(_env_file=None)

        assert loaded.MEDIA_MAP_PATH == "/tmp/map.json"
        assert loaded.PAGES_DIR == "/srv/pages"

    def test_cors_origins_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://site.com")

        assert Settings(_env_file=None).cors_origins_list == [
            "http://localhost:3000",
            "https://site.com",
        ]
