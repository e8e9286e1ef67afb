# =============================================================================
# tests/test_resolver.py - Reference Resolver Tests
# =============================================================================
# Covers the resolution order (direct, link, fallback, NotFound), the
# distinction between a miss and a store failure, and batch resolution.
# Uses the in-memory FakeMediaStore from conftest.
# =============================================================================

import logging

import pytest

from media.errors import InvalidReferenceError, StoreUnavailableError
from media.fallbacks import DEFAULT_FALLBACKS
from media.resolver import ReferenceResolver
from media.types import NotFound, ResolutionSource, ResolvedAsset, ResourceType

FALLBACKS = {"legacy-hero": "hero/legacy", "legacy-video": "videos/legacy-intro"}


@pytest.fixture
def resolver(store):
    return ReferenceResolver(store, fallbacks=FALLBACKS)


class TestResolutionOrder:
    """Each step short-circuits the ones after it."""

    def test_physical_id_skips_lookup(self, resolver, store):
        # Act
        result = resolver.resolve("a/b")

        # Assert
        assert isinstance(result, ResolvedAsset)
        assert result.public_id == "a/b"
        assert result.source is ResolutionSource.DIRECT
        assert store.calls == {}

    def test_physical_id_even_when_store_down(self, resolver, store):
        store.failing.add("fetch_placeholder_link")

        assert resolver.resolve("hero/home").source is ResolutionSource.DIRECT

    def test_link_wins_over_fallback(self, resolver, store):
        # Arrange
        store.upsert_placeholder_link("legacy-hero", "hero/spring-2024")

        # Act
        result = resolver.resolve("legacy-hero")

        # Assert
        assert result.public_id == "hero/spring-2024"
        assert result.source is ResolutionSource.LINK

    def test_link_includes_registered_metadata(self, resolver, store, sample_asset_row):
        store.assets[sample_asset_row["public_id"]] = sample_asset_row
        store.upsert_placeholder_link("team-rosing", sample_asset_row["public_id"])

        result = resolver.resolve("team-rosing")

        assert result.metadata["alt_text"] == "Dr. Rosing in the clinic"
        assert result.metadata["photographer"] == "in-house"
        assert result.placeholder_id == "team-rosing"

    def test_link_to_unregistered_asset_still_resolves(self, resolver, store):
        store.upsert_placeholder_link("home-video", "videos/home-loop")

        result = resolver.resolve("home-video")

        assert result.public_id == "videos/home-loop"
        assert result.resource_type is ResourceType.VIDEO
        assert result.metadata == {}

    def test_fallback_only_on_store_miss(self, resolver):
        result = resolver.resolve("legacy-hero")

        assert result.public_id == "hero/legacy"
        assert result.source is ResolutionSource.FALLBACK
        assert result.is_fallback

    def test_fallback_logged(self, resolver, caplog):
        with caplog.at_level(logging.INFO, logger="media.resolver"):
            resolver.resolve("legacy-hero")

        assert "legacy-hero" in caplog.text

    def test_fallback_detects_video(self, resolver):
        assert resolver.resolve("legacy-video").resource_type is ResourceType.VIDEO

    def test_true_miss(self, resolver):
        result = resolver.resolve("unknown-x")

        assert isinstance(result, NotFound)
        assert result.placeholder_id == "unknown-x"
        assert not result

    def test_default_fallback_table(self, store):
        resolver = ReferenceResolver(store)

        assert resolver.fallbacks is DEFAULT_FALLBACKS
        assert resolver.resolve("homepage-hero").public_id == "homepage/hero-image"

    def test_empty_fallback_table(self, store):
        resolver = ReferenceResolver(store, fallbacks={})

        assert not resolver.resolve("homepage-hero")

    def test_no_caching(self, resolver, store):
        resolver.resolve("legacy-hero")
        store.upsert_placeholder_link("legacy-hero", "hero/new")

        assert resolver.resolve("legacy-hero").public_id == "hero/new"


class TestResolveErrors:
    """Invalid input and degraded store."""

    @pytest.mark.parametrize("placeholder_id", ["", "   ", None, 42])
    def test_invalid_id(self, resolver, placeholder_id):
        with pytest.raises(InvalidReferenceError):
            resolver.resolve(placeholder_id)

    def test_store_failure_is_not_a_miss(self, resolver, store):
        # Arrange
        store.failing.add("fetch_placeholder_link")

        # Act / Assert
        with pytest.raises(StoreUnavailableError) as exc_info:
            resolver.resolve("legacy-hero")

        assert exc_info.value.status_code == 503
        assert exc_info.value.details["operation"] == "resolve"

    def test_asset_fetch_failure(self, resolver, store):
        store.upsert_placeholder_link("home-hero-image", "hero/a")
        store.failing.add("fetch_asset")

        with pytest.raises(StoreUnavailableError):
            resolver.resolve("home-hero-image")


class TestResolveMany:

    def test_mixed_results(self, resolver, store):
        store.upsert_placeholder_link("home-hero-image", "hero/a")

        results = resolver.resolve_many(["home-hero-image", "legacy-hero", "missing", "x/y"])

        assert results["home-hero-image"].source is ResolutionSource.LINK
        assert results["legacy-hero"].source is ResolutionSource.FALLBACK
        assert not results["missing"]
        assert results["x/y"].source is ResolutionSource.DIRECT
