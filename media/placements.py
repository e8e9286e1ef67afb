# =============================================================================
# media/placements.py - Placement Registry
# =============================================================================
# Static table: area -> storage folder, default dimensions and default
# Cloudinary transformations. Pure data, no I/O.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from lib.utils import slugify
from media.errors import UnknownAreaError
from media.types import CropMode, Dimensions, Gravity, MediaArea


@dataclass(frozen=True)
class Placement:
    """Defaults applied when delivering an asset into an area."""
    area: MediaArea
    path_prefix: str
    description: str
    default_dimensions: Dimensions
    default_transformations: tuple[str, ...]

    @property
    def default_crop(self) -> CropMode | None:
        return _transformation_value(self.default_transformations, "c_", CropMode)

    @property
    def default_gravity(self) -> Gravity | None:
        return _transformation_value(self.default_transformations, "g_", Gravity)

    def to_dict(self) -> dict:
        return {
            "area": self.area.value,
            "path_prefix": self.path_prefix,
            "description": self.description,
            "default_dimensions": self.default_dimensions.to_dict(),
            "default_transformations": list(self.default_transformations),
        }


def _transformation_value(transformations, prefix, enum_cls):
    for item in transformations:
        if item.startswith(prefix):
            return enum_cls(item[len(prefix):])
    return None


_FILL_AUTO = ("c_fill", "g_auto", "f_auto", "q_auto")

_PLACEMENTS: dict[MediaArea, Placement] = {
    MediaArea.HERO: Placement(
        area=MediaArea.HERO,
        path_prefix="hero",
        description="Main hero images for section headers",
        default_dimensions=Dimensions(1920, 1080, 16 / 9),
        default_transformations=_FILL_AUTO,
    ),
    MediaArea.ARTICLE: Placement(
        area=MediaArea.ARTICLE,
        path_prefix="articles",
        description="Article header images",
        default_dimensions=Dimensions(1200, 675, 16 / 9),
        default_transformations=_FILL_AUTO,
    ),
    MediaArea.SERVICE: Placement(
        area=MediaArea.SERVICE,
        path_prefix="services",
        description="Service category images",
        default_dimensions=Dimensions(800, 600, 4 / 3),
        default_transformations=_FILL_AUTO,
    ),
    MediaArea.TEAM: Placement(
        area=MediaArea.TEAM,
        path_prefix="team/headshots",
        description="Team member headshots",
        default_dimensions=Dimensions(600, 800, 3 / 4),
        default_transformations=("c_fill", "g_face", "f_auto", "q_auto"),
    ),
    MediaArea.GALLERY: Placement(
        area=MediaArea.GALLERY,
        path_prefix="gallery",
        description="Before/after gallery images",
        default_dimensions=Dimensions(800, 600, 4 / 3),
        default_transformations=_FILL_AUTO,
    ),
    MediaArea.LOGO: Placement(
        area=MediaArea.LOGO,
        path_prefix="branding",
        description="Logo and branding assets",
        # Height 0: scale to width, keep the source aspect ratio
        default_dimensions=Dimensions(200, 0, 0),
        default_transformations=("c_scale", "f_auto", "q_auto"),
    ),
    MediaArea.VIDEO_THUMBNAIL: Placement(
        area=MediaArea.VIDEO_THUMBNAIL,
        path_prefix="videos/thumbnails",
        description="Thumbnails for videos",
        default_dimensions=Dimensions(1280, 720, 16 / 9),
        default_transformations=_FILL_AUTO,
    ),
}

# Read-only view; the registry never changes after import
PLACEMENT_REGISTRY: Mapping[MediaArea, Placement] = MappingProxyType(_PLACEMENTS)


def to_area(area: MediaArea | str) -> MediaArea:
    """Coerce a string to MediaArea, raising UnknownAreaError for anything else."""
    if isinstance(area, MediaArea):
        return area
    try:
        return MediaArea(area)
    except ValueError:
        raise UnknownAreaError(area, [a.value for a in MediaArea]) from None


def get_placement(area: MediaArea | str) -> Placement:
    """Get the placement defaults for an area."""
    return PLACEMENT_REGISTRY[to_area(area)]


def list_placements() -> list[Placement]:
    """All placements in declaration order."""
    return list(PLACEMENT_REGISTRY.values())


def placement_folder(area: MediaArea | str, *parts: str) -> str:
    """
    Canonical storage folder for uploads into an area.

    Example:
        placement_folder("team", "Dr. Rosing")  # "team/headshots/dr-rosing"
    """
    placement = get_placement(area)
    segments = [placement.path_prefix] + [slugify(p) for p in parts if p]
    return "/".join(segments)
