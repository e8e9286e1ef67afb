# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(); tests swap them
# with app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.config import settings
from media.fallbacks import DEFAULT_FALLBACKS
from media.registrar import AssetRegistrar
from media.resolver import ReferenceResolver
from media.store import MediaStore
from media.urls import CdnConfig


def get_store() -> MediaStore:
    """
    Get the media store.

    Returns the singleton Supabase client wrapper.
    """
    from lib.supabase_client import SupabaseClient

    return SupabaseClient


def get_cdn() -> CdnConfig:
    """CDN settings for URL building."""
    return CdnConfig(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        host=settings.CLOUDINARY_CDN_HOST,
    )


def get_resolver(store: MediaStore = Depends(get_store)) -> ReferenceResolver:
    """Request-scoped resolver over the store and the shipped fallback table."""
    return ReferenceResolver(store, fallbacks=DEFAULT_FALLBACKS)


def get_registrar(store: MediaStore = Depends(get_store)) -> AssetRegistrar:
    """Request-scoped registrar over the store."""
    return AssetRegistrar(store)


# Type aliases for dependency injection
StoreDep = Annotated[MediaStore, Depends(get_store)]
CdnDep = Annotated[CdnConfig, Depends(get_cdn)]
ResolverDep = Annotated[ReferenceResolver, Depends(get_resolver)]
RegistrarDep = Annotated[AssetRegistrar, Depends(get_registrar)]
