# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeMediaStore: in-memory MediaStore with switchable failures
# - Common placeholder and asset fixtures
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "demo")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from typing import Any

import pytest

from media.errors import MediaStoreError
from media.types import LogicalPlaceholder


# =============================================================================
# In-memory Store
# =============================================================================

class FakeMediaStore:
    """
    Dict-backed MediaStore.

    Add a method name to `failing` to make that method raise
    MediaStoreError; `calls` counts invocations per method.
    """

    def __init__(self):
        self.assets: dict[str, dict[str, Any]] = {}
        self.links: dict[str, dict[str, Any]] = {}
        self.placeholders: dict[str, dict[str, Any]] = {}
        self.failing: set[str] = set()
        self.calls: dict[str, int] = {}

    def _enter(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.failing:
            raise MediaStoreError(f"{name} failed", code="FAKE_STORE_DOWN")

    # Assets
    def fetch_asset(self, public_id):
        self._enter("fetch_asset")
        row = self.assets.get(public_id)
        return dict(row) if row else None

    def upsert_asset(self, row):
        self._enter("upsert_asset")
        existing = self.assets.get(row["public_id"], {})
        stored = {
            **row,
            "created_at": existing.get("created_at", "2024-01-15T10:00:00Z"),
            "updated_at": "2024-01-15T10:00:00Z",
        }
        self.assets[row["public_id"]] = stored
        return dict(stored)

    def list_assets(self, limit=50, offset=0, resource_type=None):
        self._enter("list_assets")
        rows = [r for r in self.assets.values() if not resource_type or r["resource_type"] == resource_type]
        return [dict(r) for r in rows[offset:offset + limit]]

    def delete_asset(self, public_id):
        self._enter("delete_asset")
        return self.assets.pop(public_id, None) is not None

    # Links
    def fetch_placeholder_link(self, placeholder_id):
        self._enter("fetch_placeholder_link")
        row = self.links.get(placeholder_id)
        return dict(row) if row else None

    def fetch_links_for_asset(self, public_id):
        self._enter("fetch_links_for_asset")
        return [dict(r) for r in self.links.values() if r["public_id"] == public_id]

    def list_placeholder_links(self):
        self._enter("list_placeholder_links")
        return [dict(self.links[k]) for k in sorted(self.links)]

    def upsert_placeholder_link(self, placeholder_id, public_id, area=None):
        self._enter("upsert_placeholder_link")
        row = {"placeholder_id": placeholder_id, "public_id": public_id, "area": area}
        self.links[placeholder_id] = row
        return dict(row)

    def delete_placeholder_link(self, placeholder_id):
        self._enter("delete_placeholder_link")
        return self.links.pop(placeholder_id, None) is not None

    def delete_links_for_asset(self, public_id):
        self._enter("delete_links_for_asset")
        doomed = [k for k, r in self.links.items() if r["public_id"] == public_id]
        for key in doomed:
            del self.links[key]
        return len(doomed)

    def rename_placeholder_link(self, old_id, new_id):
        self._enter("rename_placeholder_link")
        row = self.links.pop(old_id, None)
        if row is None:
            return False
        self.links[new_id] = {**row, "placeholder_id": new_id}
        return True

    # Placeholders
    def fetch_all_placeholders(self):
        self._enter("fetch_all_placeholders")
        return [dict(self.placeholders[k]) for k in sorted(self.placeholders)]

    def upsert_placeholders(self, rows):
        self._enter("upsert_placeholders")
        for row in rows:
            self.placeholders[row["id"]] = dict(row)
        return len(rows)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory store."""
    return FakeMediaStore()


@pytest.fixture
def sample_asset_row():
    """A media_assets row as Supabase returns it."""
    return {
        "public_id": "team/headshots/dr-rosing",
        "resource_type": "image",
        "title": "Dr. Rosing",
        "alt_text": "Dr. Rosing in the clinic",
        "width": 600,
        "height": 800,
        "tags": ["team"],
        "metadata": {"photographer": "in-house"},
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-16T09:30:00Z",
    }


@pytest.fixture
def duplicate_placeholders():
    """Three occurrences of "dup" on different pages plus one unique ID."""
    return [
        LogicalPlaceholder(id="dup", page="home", section="hero"),
        LogicalPlaceholder(id="about-main-image", page="about", section="main"),
        LogicalPlaceholder(id="dup", page="about", section="team"),
        LogicalPlaceholder(id="dup", page="services", section="Medical Spa"),
    ]


@pytest.fixture
def sample_media_map():
    """Two pages in media map file format."""
    return [
        {
            "id": "home",
            "name": "Home",
            "path": "/",
            "sections": [
                {
                    "id": "hero",
                    "name": "Hero",
                    "description": "hero section for home page",
                    "mediaPlaceholders": [
                        {"id": "home-hero-image", "area": "hero"},
                        {"id": "home-hero-video", "area": "video-thumbnail"},
                    ],
                },
            ],
        },
        {
            "id": "about",
            "name": "About",
            "path": "/about",
            "sections": [
                {
                    "id": "team",
                    "name": "Team",
                    "description": "team section for about page",
                    "mediaPlaceholders": [
                        {
                            "id": "about-team-image",
                            "area": "team",
                            "dimensions": {"width": 600, "height": 800, "aspectRatio": 0.75},
                        },
                    ],
                },
            ],
        },
    ]
