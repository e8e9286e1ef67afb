# =============================================================================
# app/routers/admin.py - Admin Media Endpoints
# =============================================================================
# Write path and maintenance views, all behind Supabase Auth:
# - POST/GET /admin/assets, GET/DELETE /admin/assets/{public_id}
# - GET /admin/links, PUT/DELETE /admin/links/{placeholder_id}
# - GET /admin/placeholders, GET /admin/placeholders/duplicates
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.dependencies import RegistrarDep, StoreDep
from core.models.media import (
    AssetList,
    AssetResponse,
    DeleteAssetResponse,
    DuplicateConflictSchema,
    DuplicateReport,
    LinkRequest,
    LinkResponse,
    PlaceholderResponse,
    RegisterAssetRequest,
)
from core.services.media_map_service import MediaMapService
from media.duplicates import find_duplicate_ids
from media.types import ResourceType

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])


# =============================================================================
# Assets
# =============================================================================

@router.post("/admin/assets", response_model=AssetResponse)
def register_asset(request: RegisterAssetRequest, registrar: RegistrarDep):
    """
    Register (or re-register) an uploaded asset.

    Idempotent: the same body twice leaves one row with the same values.
    Does not link the asset to any placeholder.
    """
    asset = registrar.register(request.public_id, request.to_metadata())
    return AssetResponse.from_asset(asset)


@router.get("/admin/assets", response_model=AssetList)
def list_assets(
    registrar: RegistrarDep,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    resource_type: Optional[ResourceType] = Query(None),
):
    """List registered assets, newest first."""
    assets = registrar.list_assets(limit=limit, offset=offset, resource_type=resource_type)
    return AssetList(
        assets=[AssetResponse.from_asset(a) for a in assets],
        count=len(assets),
        limit=limit,
        offset=offset,
    )


@router.get("/admin/assets/{public_id:path}", response_model=AssetResponse)
def get_asset(public_id: str, registrar: RegistrarDep):
    """Fetch one registered asset. 404 ASSET_NOT_FOUND if unregistered."""
    return AssetResponse.from_asset(registrar.get_asset(public_id))


@router.delete("/admin/assets/{public_id:path}", response_model=DeleteAssetResponse)
def delete_asset(
    public_id: str,
    registrar: RegistrarDep,
    user: AuthUser = Depends(get_current_user),
    cascade: bool = Query(False, description="Also remove links to this asset"),
):
    """
    Delete an asset row.

    Refused with 409 ASSET_IN_USE while placeholders link to it, unless
    cascade=true, which removes those links first.
    """
    unlinked = registrar.delete_asset(public_id, cascade=cascade)
    logger.info(f"User {user.id} deleted asset {public_id}")
    return DeleteAssetResponse(public_id=public_id, unlinked_placeholders=unlinked)


# =============================================================================
# Links
# =============================================================================

@router.get("/admin/links", response_model=list[LinkResponse])
def list_links(registrar: RegistrarDep):
    """Every placeholder -> asset link."""
    return [LinkResponse.from_link(link) for link in registrar.list_links()]


@router.put("/admin/links/{placeholder_id}", response_model=LinkResponse)
def put_link(placeholder_id: str, request: LinkRequest, registrar: RegistrarDep):
    """Point a placeholder at a public ID, replacing any existing link."""
    link = registrar.link(placeholder_id, request.public_id, request.area)
    return LinkResponse.from_link(link)


@router.delete("/admin/links/{placeholder_id}")
def delete_link(placeholder_id: str, registrar: RegistrarDep):
    """Remove a placeholder's link; it then resolves via fallback or not at all."""
    removed = registrar.unlink(placeholder_id)
    return {"placeholder_id": placeholder_id, "removed": removed}


# =============================================================================
# Placeholders
# =============================================================================

@router.get("/admin/placeholders", response_model=list[PlaceholderResponse])
def list_placeholders(store: StoreDep):
    """Synced placeholders with the public ID each one links to."""
    return [
        PlaceholderResponse.from_placeholder(placeholder, public_id)
        for placeholder, public_id in MediaMapService.list_placeholders(store)
    ]


@router.get("/admin/placeholders/duplicates", response_model=DuplicateReport)
def get_duplicates():
    """Duplicate placeholder IDs in the media map file."""
    placeholders = MediaMapService.load_placeholders(settings.MEDIA_MAP_PATH)
    conflicts = find_duplicate_ids(placeholders)
    return DuplicateReport(
        total_placeholders=len(placeholders),
        duplicate_ids=len(conflicts),
        conflicts=[DuplicateConflictSchema.from_conflict(c) for c in conflicts],
    )
