# =============================================================================
# tests/test_placements.py - Placement Registry Tests
# =============================================================================

import pytest

from media.errors import UnknownAreaError
from media.placements import (
    PLACEMENT_REGISTRY,
    get_placement,
    list_placements,
    placement_folder,
    to_area,
)
from media.types import CropMode, Gravity, MediaArea


class TestGetPlacement:
    """Lookups over the closed area set."""

    def test_every_area_has_a_placement(self):
        for area in MediaArea:
            assert get_placement(area).area is area

    def test_accepts_string_values(self):
        assert get_placement("team") is get_placement(MediaArea.TEAM)
        assert get_placement("video-thumbnail").path_prefix == "videos/thumbnails"

    def test_unknown_area_fails_fast(self):
        with pytest.raises(UnknownAreaError) as exc_info:
            get_placement("banner")

        assert exc_info.value.code == "UNKNOWN_AREA"
        assert "hero" in exc_info.value.details["known_areas"]

    def test_unknown_area_is_a_value_error(self):
        with pytest.raises(ValueError):
            to_area("sidebar")

    def test_team_defaults(self):
        placement = get_placement(MediaArea.TEAM)

        assert placement.path_prefix == "team/headshots"
        assert placement.default_dimensions.width == 600
        assert placement.default_dimensions.height == 800
        assert placement.default_crop is CropMode.FILL
        assert placement.default_gravity is Gravity.FACE

    def test_logo_scales_without_gravity(self):
        placement = get_placement("logo")

        assert placement.default_crop is CropMode.SCALE
        assert placement.default_gravity is None
        assert placement.default_dimensions.height == 0


class TestRegistry:
    """The table itself."""

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            PLACEMENT_REGISTRY[MediaArea.HERO] = None  # type: ignore[index]

    def test_list_placements_in_declaration_order(self):
        areas = [p.area for p in list_placements()]

        assert areas == list(MediaArea)

    def test_to_dict(self):
        result = get_placement("hero").to_dict()

        assert result["area"] == "hero"
        assert result["default_dimensions"]["width"] == 1920
        assert result["default_transformations"] == ["c_fill", "g_auto", "f_auto", "q_auto"]


class TestPlacementFolder:
    """Upload folder paths."""

    def test_slugifies_parts(self):
        assert placement_folder("team", "Dr. Rosing") == "team/headshots/dr-rosing"

    def test_prefix_only(self):
        assert placement_folder(MediaArea.ARTICLE) == "articles"

    def test_skips_empty_parts(self):
        assert placement_folder("gallery", "", "Before After") == "gallery/before-after"
