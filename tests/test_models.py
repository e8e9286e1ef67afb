# =============================================================================
# tests/test_models.py - Model Tests
# =============================================================================
# Unit tests for the media records and the API schemas built from them:
# - Row conversion for assets, links and placeholders
# - NotFound truthiness
# - Request validation and metadata extraction
# - Serialized field names clients depend on
# =============================================================================

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.auth import AuthUser, UserResponse
from core.models import (
    AssetResponse,
    DimensionsSchema,
    LinkRequest,
    PlaceholderResponse,
    RegisterAssetRequest,
)
from media.types import (
    Dimensions,
    LogicalPlaceholder,
    MediaArea,
    NotFound,
    PhysicalAsset,
    PlaceholderAssetLink,
    ResolutionSource,
    ResolvedAsset,
    ResourceType,
)


# =============================================================================
# Media Records
# =============================================================================

class TestPhysicalAsset:

    def test_from_db_row_lifts_columns(self, sample_asset_row):
        asset = PhysicalAsset.from_db_row(sample_asset_row)

        assert asset.resource_type is ResourceType.IMAGE
        assert asset.metadata["title"] == "Dr. Rosing"
        assert asset.metadata["photographer"] == "in-house"
        assert asset.created_at == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    def test_null_columns_not_in_metadata(self):
        asset = PhysicalAsset.from_db_row({"public_id": "a", "title": None, "metadata": None})

        assert asset.metadata == {}

    def test_to_db_row_splits_bag(self):
        asset = PhysicalAsset(public_id="a", metadata={"title": "T", "procedure": "facelift"})

        row = asset.to_db_row()

        assert row["title"] == "T"
        assert row["alt_text"] is None
        assert row["metadata"] == {"procedure": "facelift"}
        assert row["resource_type"] == "image"

    def test_bad_timestamp_is_none(self):
        asset = PhysicalAsset.from_db_row({"public_id": "a", "created_at": "yesterday"})

        assert asset.created_at is None


class TestResolveResults:

    def test_not_found_is_falsy(self):
        result = NotFound("missing")

        assert not result
        assert result.placeholder_id == "missing"

    def test_resolved_is_truthy(self):
        result = ResolvedAsset(public_id="hero/a", placeholder_id="p", source=ResolutionSource.FALLBACK)

        assert result
        assert result.is_fallback


class TestLogicalPlaceholder:

    def test_from_dict_defaults(self):
        placeholder = LogicalPlaceholder.from_dict({"id": "x"})

        assert placeholder.area is MediaArea.HERO
        assert (placeholder.page, placeholder.section) == ("home", "main")
        assert placeholder.dimensions is None

    def test_enclosing_page_wins(self):
        placeholder = LogicalPlaceholder.from_dict({"id": "x", "page": "old"}, page="about")

        assert placeholder.page == "about"

    def test_area_string_coerced(self):
        assert LogicalPlaceholder(id="x", area="team").area is MediaArea.TEAM

    def test_unknown_area(self):
        with pytest.raises(ValueError):
            LogicalPlaceholder(id="x", area="banner")

    def test_to_dict_omits_unset(self):
        assert LogicalPlaceholder(id="x").to_dict() == {
            "id": "x", "area": "hero", "page": "home", "section": "main",
        }


class TestDimensions:

    def test_ratio_computed_when_missing(self):
        assert Dimensions.from_dict({"width": 1200, "height": 800}).aspect_ratio == 1.5

    def test_zero_height_keeps_zero_ratio(self):
        assert Dimensions.from_dict({"width": 400, "height": 0}).aspect_ratio == 0.0


class TestPlaceholderAssetLink:

    def test_from_db_row(self):
        link = PlaceholderAssetLink.from_db_row({
            "placeholder_id": "p",
            "public_id": "hero/a",
            "updated_at": "2024-01-16T09:30:00+00:00",
        })

        assert link.area is None
        assert link.updated_at.day == 16


# =============================================================================
# API Schemas
# =============================================================================

class TestRegisterAssetRequest:

    def test_to_metadata_keeps_extras(self):
        request = RegisterAssetRequest(public_id="a", title="T", procedure="facelift")

        assert request.to_metadata() == {"title": "T", "procedure": "facelift"}

    def test_resource_type_as_value(self):
        request = RegisterAssetRequest(public_id="a", resource_type="video")

        assert request.to_metadata() == {"resource_type": "video"}

    def test_empty_public_id_rejected(self):
        with pytest.raises(ValidationError):
            RegisterAssetRequest(public_id="")

    def test_non_positive_width_rejected(self):
        with pytest.raises(ValidationError):
            RegisterAssetRequest(public_id="a", width=0)


class TestLinkRequest:

    def test_area_validated(self):
        with pytest.raises(ValidationError):
            LinkRequest(public_id="a", area="banner")

    def test_area_optional(self):
        assert LinkRequest(public_id="a").area is None


class TestResponses:

    def test_asset_response(self, sample_asset_row):
        response = AssetResponse.from_asset(PhysicalAsset.from_db_row(sample_asset_row))

        assert response.model_dump(mode="json")["resource_type"] == "image"

    def test_dimensions_serialized_camel_case(self):
        dims = DimensionsSchema(width=600, height=800, aspect_ratio=0.75)

        assert dims.model_dump(by_alias=True) == {"width": 600, "height": 800, "aspectRatio": 0.75}

    def test_placeholder_response(self):
        placeholder = LogicalPlaceholder(
            id="about-team-image", area="team", page="about", section="team",
            dimensions=Dimensions(600, 800, 0.75),
        )

        response = PlaceholderResponse.from_placeholder(placeholder, "team/a")

        assert response.public_id == "team/a"
        assert response.dimensions.width == 600

    def test_user_response(self):
        user = AuthUser(id=uuid4(), email="admin@example.com")

        assert UserResponse.from_user(user).email == "admin@example.com"
