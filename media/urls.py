# =============================================================================
# media/urls.py - Cloudinary Delivery URL Builder
# =============================================================================
# Deterministic string construction against the delivery template:
#
#   https://<cdn-host>/<cloud>/<resourceType>/upload/<transformations>/<publicId>
#
# No network I/O, no timestamps: identical arguments give identical URLs.
#
# Usage:
#   from media.urls import build_url, build_source_set
#   url = build_url("team/headshots/rosing", UrlOptions(width=600), area="team")
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from media.errors import InvalidReferenceError
from media.placements import Placement, get_placement
from media.types import (
    IMAGE_FORMATS,
    VIDEO_FORMATS,
    CropMode,
    Gravity,
    MediaArea,
    ResourceType,
    SourceSetEntry,
    UrlOptions,
    VideoDelivery,
)


# Breakpoint ladder for responsive images, strictly increasing
SOURCE_SET_WIDTHS: tuple[int, ...] = (640, 750, 828, 1080, 1200, 1920, 2048)

VIDEO_EXTENSIONS = (".mp4", ".webm", ".mov", ".avi", ".wmv", ".flv", ".mkv")
VIDEO_FOLDERS = frozenset({"video", "videos"})

# Image folders that sit under a video folder (poster stills)
IMAGE_FOLDER_PREFIXES = (get_placement(MediaArea.VIDEO_THUMBNAIL).path_prefix + "/",)

DEFAULT_FORMAT = "auto"
DEFAULT_QUALITY = "auto"


@dataclass(frozen=True)
class CdnConfig:
    """Where delivery URLs point. Built from settings by the API layer."""
    cloud_name: str = "demo"
    host: str = "res.cloudinary.com"

    @property
    def base_url(self) -> str:
        return f"https://{self.host.strip('/')}/{self.cloud_name}"


DEFAULT_CDN = CdnConfig()


# =============================================================================
# Validation
# =============================================================================

def _normalize_public_id(public_id: str) -> str:
    if not isinstance(public_id, str) or not public_id.strip():
        raise InvalidReferenceError(
            "public_id must be a non-empty string",
            details={"public_id": public_id},
        )
    return public_id.strip().lstrip("/")


def _is_absolute_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def _positive_int(name: str, value: Any) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidReferenceError(
            f"{name} must be a positive integer",
            details={name: value},
        )
    return value


def _quality(value: Any) -> int | str:
    if value is None:
        return DEFAULT_QUALITY
    if value == "auto":
        return value
    return _positive_int("quality", value)


def _enum_value(name: str, value: Any, enum_cls: type[Enum]) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidReferenceError(
            f"Invalid {name}: {value!r}",
            details={name: value, "allowed": [m.value for m in enum_cls]},
        ) from None


def _format(value: Any, resource_type: ResourceType) -> str:
    if value is None:
        return DEFAULT_FORMAT
    allowed = VIDEO_FORMATS if resource_type is ResourceType.VIDEO else IMAGE_FORMATS
    if value not in allowed:
        raise InvalidReferenceError(
            f"Invalid format for {resource_type.value}: {value!r}",
            details={"format": value, "allowed": sorted(allowed)},
        )
    return value


def _resource_type(value: ResourceType | str) -> ResourceType:
    return _enum_value("resource_type", value, ResourceType)


# =============================================================================
# Transformations
# =============================================================================

def build_transformation(
    options: UrlOptions | None = None,
    *,
    area: MediaArea | str | None = None,
    resource_type: ResourceType | str = ResourceType.IMAGE,
) -> str:
    """
    Build the comma-separated transformation segment.

    Order is fixed (c_, g_, w_, h_, q_, f_) so the same inputs always yield
    the same string. Gravity is dropped for c_scale, which ignores it.

    Raises:
        InvalidReferenceError: For any out-of-range or unknown option value
        UnknownAreaError: For an area outside the placement registry
    """
    opts = options or UrlOptions()
    resource_type = _resource_type(resource_type)
    placement: Placement | None = get_placement(area) if area is not None else None

    width = _positive_int("width", opts.width)
    height = _positive_int("height", opts.height)
    quality = _quality(opts.quality)
    fmt = _format(opts.format, resource_type)
    crop = _enum_value("crop", opts.crop, CropMode)
    gravity = _enum_value("gravity", opts.gravity, Gravity)

    if placement is not None:
        dims = placement.default_dimensions
        crop = crop or placement.default_crop
        gravity = gravity or placement.default_gravity
        width = width or (dims.width or None)
        if height is None and width and dims.aspect_ratio:
            height = round(width / dims.aspect_ratio)

    parts: list[str] = []
    if crop is not None:
        parts.append(f"c_{crop.value}")
    if gravity is not None and crop is not CropMode.SCALE:
        parts.append(f"g_{gravity.value}")
    if width:
        parts.append(f"w_{width}")
    if height:
        parts.append(f"h_{height}")
    parts.append(f"q_{quality}")
    parts.append(f"f_{fmt}")
    return ",".join(parts)


def _compose(cdn: CdnConfig, resource_type: ResourceType, transformation: str, public_id: str) -> str:
    return f"{cdn.base_url}/{resource_type.value}/upload/{transformation}/{public_id}"


# =============================================================================
# Public API
# =============================================================================

def build_url(
    public_id: str,
    options: UrlOptions | None = None,
    *,
    area: MediaArea | str | None = None,
    resource_type: ResourceType | str = ResourceType.IMAGE,
    cdn: CdnConfig | None = None,
) -> str:
    """
    Build a fully qualified delivery URL for a public ID.

    Args:
        public_id: Cloudinary public ID (folders allowed). An absolute
            http(s) URL is returned unchanged; legacy content stores some.
        options: Width/height/quality/format/crop/gravity overrides
        area: Placement whose defaults fill in absent options
        resource_type: "image" or "video"
        cdn: Cloud name and host (defaults to DEFAULT_CDN)

    Returns:
        Delivery URL string

    Raises:
        InvalidReferenceError: Empty public_id or invalid option values

    Example:
        build_url("x/y", UrlOptions(width=800))
        # "https://res.cloudinary.com/demo/image/upload/w_800,q_auto,f_auto/x/y"
    """
    public_id = _normalize_public_id(public_id)
    if _is_absolute_url(public_id):
        return public_id

    resource_type = _resource_type(resource_type)
    transformation = build_transformation(options, area=area, resource_type=resource_type)
    return _compose(cdn or DEFAULT_CDN, resource_type, transformation, public_id)


def build_source_set(
    public_id: str,
    options: UrlOptions | None = None,
    *,
    area: MediaArea | str | None = None,
    resource_type: ResourceType | str = ResourceType.IMAGE,
    cdn: CdnConfig | None = None,
    widths: tuple[int, ...] = SOURCE_SET_WIDTHS,
) -> list[SourceSetEntry]:
    """
    Build one URL per breakpoint width, in increasing width order.

    Videos get no source set (empty list); use build_video_delivery instead.
    When both width and height are given in options, their ratio is kept for
    every rung. A height alone is kept as-is on every rung. Otherwise the
    area's aspect ratio applies.

    Raises:
        InvalidReferenceError: Invalid width/height or other option values
    """
    public_id = _normalize_public_id(public_id)
    if _resource_type(resource_type) is ResourceType.VIDEO:
        return []

    opts = options or UrlOptions()
    requested_width = _positive_int("width", opts.width)
    requested_height = _positive_int("height", opts.height)
    ratio = requested_width / requested_height if requested_width and requested_height else None

    entries = []
    for width in sorted(set(widths)):
        height = round(width / ratio) if ratio else requested_height
        url = build_url(
            public_id,
            opts.merged(width=width, height=height),
            area=area,
            resource_type=ResourceType.IMAGE,
            cdn=cdn,
        )
        entries.append(SourceSetEntry(width=width, url=url))
    return entries


def build_srcset_attribute(
    public_id: str,
    options: UrlOptions | None = None,
    **kwargs: Any,
) -> str:
    """Render a source set as an HTML srcset value: "url 640w, url 750w, ..."."""
    entries = build_source_set(public_id, options, **kwargs)
    return ", ".join(f"{entry.url} {entry.width}w" for entry in entries)


def build_video_delivery(
    public_id: str,
    options: UrlOptions | None = None,
    *,
    area: MediaArea | str | None = None,
    cdn: CdnConfig | None = None,
    include_poster: bool = True,
) -> VideoDelivery:
    """
    Build the single video delivery URL and a first-frame JPEG poster.
    """
    public_id = _normalize_public_id(public_id)
    url = build_url(public_id, options, area=area, resource_type=ResourceType.VIDEO, cdn=cdn)
    if _is_absolute_url(public_id) or not include_poster:
        return VideoDelivery(url=url)

    poster_options = (options or UrlOptions()).merged(format="jpg")
    transformation = build_transformation(poster_options, area=area, resource_type=ResourceType.IMAGE)
    poster_url = _compose(
        cdn or DEFAULT_CDN,
        ResourceType.VIDEO,
        f"so_0,{transformation}",
        _strip_video_extension(public_id),
    )
    return VideoDelivery(url=url, poster_url=poster_url)


# =============================================================================
# Helpers
# =============================================================================

def _strip_video_extension(public_id: str) -> str:
    lowered = public_id.lower()
    for ext in VIDEO_EXTENSIONS:
        if lowered.endswith(ext):
            return public_id[: -len(ext)]
    return public_id


def detect_resource_type(public_id: str) -> ResourceType:
    """
    Guess the resource type from a public ID or URL.

    Video if it ends in a video extension or sits in a video/ or videos/
    folder; image otherwise. The video-thumbnail placement folder
    (videos/thumbnails/) holds images.
    """
    if not public_id:
        return ResourceType.IMAGE
    lowered = public_id.lower()
    if lowered.endswith(VIDEO_EXTENSIONS):
        return ResourceType.VIDEO
    if lowered.lstrip("/").startswith(IMAGE_FOLDER_PREFIXES):
        return ResourceType.IMAGE
    folders = lowered.split("/")[:-1]
    if any(folder in VIDEO_FOLDERS for folder in folders):
        return ResourceType.VIDEO
    return ResourceType.IMAGE


_TRANSFORMATION_KEYS = frozenset({
    "a", "ac", "ar", "b", "bo", "br", "c", "co", "d", "dn", "dpr", "du", "e",
    "eo", "f", "fl", "fps", "g", "h", "l", "o", "pg", "q", "r", "so", "sp",
    "t", "u", "vc", "w", "x", "y", "z",
})


def _is_transformation_segment(segment: str) -> bool:
    # e.g. "c_fill,w_800" or "q_auto"
    return all(
        "_" in part and part.split("_", 1)[0] in _TRANSFORMATION_KEYS
        for part in segment.split(",")
    )


def extract_public_id(url: str) -> str:
    """
    Extract the public ID from a Cloudinary delivery URL.

    Anything that is not a Cloudinary URL is returned unchanged.

    Example:
        extract_public_id(".../image/upload/c_fill,w_800/v1712/team/rosing")  # "team/rosing"
    """
    if not url or "/upload/" not in url:
        return url

    segments = url.split("/upload/", 1)[1].split("/")
    while len(segments) > 1 and _is_transformation_segment(segments[0]):
        segments = segments[1:]
    if len(segments) > 1 and segments[0].startswith("v") and segments[0][1:].isdigit():
        segments = segments[1:]
    return "/".join(segments)
