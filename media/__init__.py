# =============================================================================
# media - Media Identity & Resolution Library
# =============================================================================
# Turns logical placeholder IDs used by the site ("home-hero-image") into
# Cloudinary delivery URLs.
#
# Key principles:
# - URL building is pure (same input = same URL, no I/O)
# - A missing asset is a NotFound value; store failures are exceptions
# - Registering an asset and linking it to a placeholder are separate steps
# - The store and the fallback table are injected, never module globals
#
# Architecture:
#   placeholder id -> ReferenceResolver -> ResolvedAsset -> build_url()
#
# Usage:
#   from media import ReferenceResolver, build_url
#
#   resolver = ReferenceResolver(SupabaseClient)
#   asset = resolver.resolve("about-hero-image")
#   if asset:
#       url = build_url(asset.public_id, area="hero")
# =============================================================================

from media.duplicates import (
    DuplicateIdConflict,
    DuplicateRepairResult,
    IdRename,
    RenameReport,
    apply_renames,
    find_duplicate_ids,
    repair_duplicate_ids,
)
from media.errors import (
    AssetInUseError,
    AssetNotFoundError,
    InvalidReferenceError,
    MediaMapError,
    MediaStoreError,
    StoreUnavailableError,
    UnknownAreaError,
)
from media.fallbacks import DEFAULT_FALLBACKS
from media.placements import (
    PLACEMENT_REGISTRY,
    Placement,
    get_placement,
    list_placements,
    placement_folder,
)
from media.registrar import AssetRegistrar
from media.resolver import ReferenceResolver
from media.store import MediaStore
from media.types import (
    CropMode,
    Dimensions,
    Gravity,
    LogicalPlaceholder,
    MediaArea,
    NotFound,
    PhysicalAsset,
    PlaceholderAssetLink,
    ResolutionSource,
    ResolvedAsset,
    ResourceType,
    SourceSetEntry,
    UrlOptions,
    VideoDelivery,
)
from media.urls import (
    CdnConfig,
    SOURCE_SET_WIDTHS,
    build_source_set,
    build_srcset_attribute,
    build_url,
    build_video_delivery,
    detect_resource_type,
    extract_public_id,
)

__version__ = "1.0.0"

__all__ = [
    # Placement Registry
    "PLACEMENT_REGISTRY",
    "Placement",
    "get_placement",
    "list_placements",
    "placement_folder",
    # URL Builder
    "CdnConfig",
    "SOURCE_SET_WIDTHS",
    "build_url",
    "build_source_set",
    "build_srcset_attribute",
    "build_video_delivery",
    "detect_resource_type",
    "extract_public_id",
    # Resolution
    "ReferenceResolver",
    "DEFAULT_FALLBACKS",
    "MediaStore",
    # Registration
    "AssetRegistrar",
    # Consistency
    "DuplicateIdConflict",
    "DuplicateRepairResult",
    "IdRename",
    "RenameReport",
    "find_duplicate_ids",
    "repair_duplicate_ids",
    "apply_renames",
    # Types
    "CropMode",
    "Dimensions",
    "Gravity",
    "LogicalPlaceholder",
    "MediaArea",
    "NotFound",
    "PhysicalAsset",
    "PlaceholderAssetLink",
    "ResolutionSource",
    "ResolvedAsset",
    "ResourceType",
    "SourceSetEntry",
    "UrlOptions",
    "VideoDelivery",
    # Errors
    "AssetInUseError",
    "AssetNotFoundError",
    "InvalidReferenceError",
    "MediaMapError",
    "MediaStoreError",
    "StoreUnavailableError",
    "UnknownAreaError",
]
