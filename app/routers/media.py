# =============================================================================
# app/routers/media.py - Public Media Endpoints
# =============================================================================
# Read-only endpoints the site calls while rendering:
# - GET /media/placements               Placement registry
# - GET /media/resolve/{placeholder_id} Placeholder -> delivery URLs
# - GET /media/url/{public_id}          Public ID -> delivery URLs
#
# Handlers that reach the store are plain def: the Supabase client is
# synchronous and FastAPI runs these in its threadpool.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Query

from app.dependencies import CdnDep, ResolverDep
from app.exceptions import MediaNotFoundError
from core.models.media import PlacementResponse, ResolveResponse, SourceSetItem, UrlResponse
from media.errors import InvalidReferenceError
from media.placements import list_placements, to_area
from media.types import MediaArea, ResourceType, UrlOptions
from media.urls import (
    CdnConfig,
    build_source_set,
    build_transformation,
    build_url,
    build_video_delivery,
    detect_resource_type,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helpers
# =============================================================================

def _parse_quality(quality: Optional[str]) -> int | str | None:
    """Query strings are text: "auto" stays, digits become an int."""
    if quality is None or quality == "auto":
        return quality
    if quality.isdigit():
        return int(quality)
    raise InvalidReferenceError(
        f"quality must be a positive integer or 'auto', got {quality!r}",
        details={"quality": quality},
    )


def _url_options(
    width: Optional[int],
    height: Optional[int],
    quality: Optional[str],
    format: Optional[str],
    crop: Optional[str],
    gravity: Optional[str],
) -> UrlOptions:
    return UrlOptions(
        width=width,
        height=height,
        quality=_parse_quality(quality),
        format=format,
        crop=crop,
        gravity=gravity,
    )


def _deliver(
    public_id: str,
    resource_type: ResourceType,
    options: UrlOptions,
    area: MediaArea | None,
    cdn: CdnConfig,
) -> tuple[str, list[SourceSetItem], str | None]:
    """(url, srcset, poster_url) for one asset."""
    if resource_type is ResourceType.VIDEO:
        delivery = build_video_delivery(public_id, options, area=area, cdn=cdn)
        return delivery.url, [], delivery.poster_url

    url = build_url(public_id, options, area=area, resource_type=resource_type, cdn=cdn)
    srcset = [
        SourceSetItem.from_entry(entry)
        for entry in build_source_set(public_id, options, area=area, resource_type=resource_type, cdn=cdn)
    ]
    return url, srcset, None


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/media/placements", response_model=list[PlacementResponse])
async def get_placements():
    """
    List every placement area with its folder and delivery defaults.
    """
    return [PlacementResponse.from_placement(p) for p in list_placements()]


@router.get("/media/resolve/{placeholder_id:path}", response_model=ResolveResponse)
def resolve_placeholder(
    placeholder_id: str,
    resolver: ResolverDep,
    cdn: CdnDep,
    width: Optional[int] = Query(None, description="Target width in pixels"),
    height: Optional[int] = Query(None, description="Target height in pixels"),
    quality: Optional[str] = Query(None, description="1-100 or 'auto'"),
    format: Optional[str] = Query(None, description="auto, jpg, png, webp, avif, gif, mp4, ..."),
    crop: Optional[str] = Query(None, description="fill, scale, crop, thumb, pad"),
    gravity: Optional[str] = Query(None, description="auto, face, center, north, ..."),
    area: Optional[str] = Query(None, description="Placement whose defaults apply"),
):
    """
    Resolve a placeholder ID and return its delivery URLs.

    Resolution order: physical ID passthrough, persisted link, fallback
    table. The response's source field says which one matched.

    Errors:
    - 400 INVALID_REFERENCE / UNKNOWN_AREA: bad ID or option value
    - 404 MEDIA_NOT_FOUND: no asset via any path
    - 503 STORE_UNAVAILABLE: Supabase lookup failed
    """
    options = _url_options(width, height, quality, format, crop, gravity)
    media_area = to_area(area) if area else None
    # Format depends on the resolved resource type and is checked in _deliver
    build_transformation(options.merged(format=None), area=media_area)

    result = resolver.resolve(placeholder_id)
    if not result:
        raise MediaNotFoundError(result.placeholder_id)

    url, srcset, poster_url = _deliver(
        result.public_id, result.resource_type, options, media_area, cdn
    )
    return ResolveResponse(
        placeholder_id=result.placeholder_id,
        public_id=result.public_id,
        resource_type=result.resource_type,
        source=result.source,
        url=url,
        srcset=srcset,
        poster_url=poster_url,
        metadata=result.metadata,
    )


@router.get("/media/url/{public_id:path}", response_model=UrlResponse)
async def get_media_url(
    public_id: str,
    cdn: CdnDep,
    resource_type: Optional[ResourceType] = Query(None, description="Detected when omitted"),
    width: Optional[int] = Query(None),
    height: Optional[int] = Query(None),
    quality: Optional[str] = Query(None),
    format: Optional[str] = Query(None),
    crop: Optional[str] = Query(None),
    gravity: Optional[str] = Query(None),
    area: Optional[str] = Query(None),
):
    """
    Build delivery URLs for a known public ID. No store lookup.
    """
    options = _url_options(width, height, quality, format, crop, gravity)
    media_area = to_area(area) if area else None
    kind = resource_type or detect_resource_type(public_id)

    url, srcset, poster_url = _deliver(public_id, kind, options, media_area, cdn)
    return UrlResponse(
        public_id=public_id,
        resource_type=kind,
        url=url,
        srcset=srcset,
        poster_url=poster_url,
    )
