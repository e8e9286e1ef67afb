# =============================================================================
# media/types.py - Core Types
# =============================================================================
# Value types shared by the placement registry, URL builder, resolver,
# registrar and duplicate-repair pass. Enums are closed sets: constructing one
# from an unknown string raises ValueError.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Literal


# =============================================================================
# Enums
# =============================================================================

class MediaArea(str, Enum):
    """Logical placement areas on the site."""
    HERO = "hero"
    ARTICLE = "article"
    SERVICE = "service"
    TEAM = "team"
    GALLERY = "gallery"
    LOGO = "logo"
    VIDEO_THUMBNAIL = "video-thumbnail"


class ResourceType(str, Enum):
    """Cloudinary resource types we deliver."""
    IMAGE = "image"
    VIDEO = "video"


class CropMode(str, Enum):
    """Cloudinary crop modes (c_ parameter)."""
    FILL = "fill"
    SCALE = "scale"
    CROP = "crop"
    THUMB = "thumb"
    PAD = "pad"


class Gravity(str, Enum):
    """Cloudinary gravity values (g_ parameter)."""
    AUTO = "auto"
    FACE = "face"
    CENTER = "center"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class ResolutionSource(str, Enum):
    """Which step of the resolution chain produced an asset."""
    DIRECT = "direct"      # ID already looked physical (contained a "/")
    LINK = "link"          # Persisted placeholder -> asset link
    FALLBACK = "fallback"  # Static compatibility table


IMAGE_FORMATS = frozenset({"auto", "jpg", "png", "webp", "avif", "gif"})
VIDEO_FORMATS = frozenset({"auto", "mp4", "webm", "mov"})

Quality = int | Literal["auto"]


# =============================================================================
# URL Options
# =============================================================================

@dataclass(frozen=True)
class UrlOptions:
    """
    Per-request delivery options. Every field is optional; absent values fall
    back to placement defaults, then to format="auto" / quality="auto".

    Examples:
        UrlOptions(width=800)
        UrlOptions(width=600, height=800, crop="fill", gravity="face")
    """
    width: int | None = None
    height: int | None = None
    quality: Quality | None = None
    format: str | None = None
    crop: CropMode | str | None = None
    gravity: Gravity | str | None = None

    def merged(self, **overrides: Any) -> "UrlOptions":
        """Copy with the given fields replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "quality": self.quality,
            "format": self.format,
            "crop": self.crop.value if isinstance(self.crop, CropMode) else self.crop,
            "gravity": self.gravity.value if isinstance(self.gravity, Gravity) else self.gravity,
        }


@dataclass(frozen=True)
class SourceSetEntry:
    """One rung of a responsive source set."""
    width: int
    url: str


@dataclass(frozen=True)
class VideoDelivery:
    """Video delivery: a single URL plus an optional poster image."""
    url: str
    poster_url: str | None = None


# =============================================================================
# Domain Records
# =============================================================================

@dataclass(frozen=True)
class Dimensions:
    """Size hint. A zero height means "keep the source aspect ratio"."""
    width: int
    height: int
    aspect_ratio: float = 0.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Dimensions":
        width = int(d.get("width", 0) or 0)
        height = int(d.get("height", 0) or 0)
        ratio = d.get("aspectRatio", d.get("aspect_ratio"))
        if ratio is None:
            ratio = width / height if width and height else 0.0
        return cls(width=width, height=height, aspect_ratio=float(ratio))

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "aspectRatio": self.aspect_ratio,
        }


@dataclass
class LogicalPlaceholder:
    """
    A stable, application-level media slot (e.g. "home-hero-image").

    page/section only group placeholders for admin display; the id alone must
    be unique across the whole site.
    """
    id: str
    area: MediaArea = MediaArea.HERO
    page: str = "home"
    section: str = "main"
    name: str | None = None
    description: str | None = None
    dimensions: Dimensions | None = None

    def __post_init__(self):
        if isinstance(self.area, str) and not isinstance(self.area, MediaArea):
            self.area = MediaArea(self.area)

    def with_id(self, new_id: str) -> "LogicalPlaceholder":
        return replace(self, id=new_id)

    @classmethod
    def from_dict(
        cls,
        d: dict[str, Any],
        page: str | None = None,
        section: str | None = None,
    ) -> "LogicalPlaceholder":
        """
        Build from a media-map or database row.

        page/section from the enclosing map node win over values stored on
        the placeholder itself.
        """
        dims = d.get("dimensions")
        return cls(
            id=d["id"],
            area=d.get("area") or MediaArea.HERO,
            page=page or d.get("page") or "home",
            section=section or d.get("section") or "main",
            name=d.get("name"),
            description=d.get("description"),
            dimensions=Dimensions.from_dict(dims) if dims else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "area": self.area.value,
            "page": self.page,
            "section": self.section,
        }
        if self.name is not None:
            result["name"] = self.name
        if self.description is not None:
            result["description"] = self.description
        if self.dimensions is not None:
            result["dimensions"] = self.dimensions.to_dict()
        return result


# Columns of media_assets that are lifted out of the free-form metadata
ASSET_COLUMNS = ("title", "alt_text", "width", "height", "tags")


@dataclass
class PhysicalAsset:
    """A CDN-side asset identified by its Cloudinary public ID."""
    public_id: str
    resource_type: ResourceType = ResourceType.IMAGE
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "PhysicalAsset":
        """Create PhysicalAsset from a media_assets row."""
        metadata = dict(row.get("metadata") or {})
        for column in ASSET_COLUMNS:
            if row.get(column) is not None:
                metadata[column] = row[column]

        return cls(
            public_id=row["public_id"],
            resource_type=ResourceType(row.get("resource_type") or "image"),
            metadata=metadata,
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )

    def to_db_row(self) -> dict[str, Any]:
        """Split metadata into the media_assets columns plus the jsonb bag."""
        extra = {k: v for k, v in self.metadata.items() if k not in ASSET_COLUMNS}
        row: dict[str, Any] = {
            "public_id": self.public_id,
            "resource_type": self.resource_type.value,
            "metadata": extra,
        }
        for column in ASSET_COLUMNS:
            row[column] = self.metadata.get(column)
        return row


@dataclass
class ResolvedAsset(PhysicalAsset):
    """A PhysicalAsset tagged with the placeholder and path that produced it."""
    placeholder_id: str = ""
    source: ResolutionSource = ResolutionSource.LINK

    @property
    def is_fallback(self) -> bool:
        return self.source is ResolutionSource.FALLBACK


@dataclass(frozen=True)
class NotFound:
    """No physical asset is associated with the placeholder via any path."""
    placeholder_id: str

    def __bool__(self) -> bool:
        return False


ResolveResult = ResolvedAsset | NotFound


@dataclass
class PlaceholderAssetLink:
    """The canonical placeholder -> public ID association."""
    placeholder_id: str
    public_id: str
    area: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "PlaceholderAssetLink":
        """Create PlaceholderAssetLink from a media_placeholder_links row."""
        return cls(
            placeholder_id=row["placeholder_id"],
            public_id=row["public_id"],
            area=row.get("area"),
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse a Supabase ISO timestamp; anything unparseable becomes None."""
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
