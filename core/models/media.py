# =============================================================================
# core/models/media.py - Media API Schemas
# =============================================================================
# These models define the API contract for media operations:
# - Resolution: ResolveResponse (placeholder -> delivery URLs)
# - URL building: UrlResponse
# - Registration/linking: RegisterAssetRequest, AssetResponse, LinkRequest,
#   LinkResponse
# - Maintenance views: PlaceholderResponse, DuplicateReport
#
# The media package works with dataclasses; these schemas are the JSON
# shape clients see. from_* classmethods convert between the two.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from media.duplicates import DuplicateIdConflict
from media.placements import Placement
from media.types import (
    LogicalPlaceholder,
    MediaArea,
    PhysicalAsset,
    PlaceholderAssetLink,
    ResolutionSource,
    ResourceType,
    SourceSetEntry,
)


# =============================================================================
# Shared
# =============================================================================

class DimensionsSchema(BaseModel):
    """Width/height hint; aspect_ratio is serialized as aspectRatio."""
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    aspect_ratio: float = Field(0.0, ge=0, serialization_alias="aspectRatio")


class SourceSetItem(BaseModel):
    """One srcset rung."""
    width: int
    url: str

    @classmethod
    def from_entry(cls, entry: SourceSetEntry) -> "SourceSetItem":
        return cls(width=entry.width, url=entry.url)


class PlacementResponse(BaseModel):
    """
    One row of the placement registry.

    Example:
        {
            "area": "team",
            "path_prefix": "team/headshots",
            "description": "Team member headshots",
            "default_dimensions": {"width": 600, "height": 800, "aspectRatio": 0.75},
            "default_transformations": ["c_fill", "g_face", "f_auto", "q_auto"]
        }
    """
    area: MediaArea
    path_prefix: str
    description: str
    default_dimensions: DimensionsSchema
    default_transformations: list[str]

    @classmethod
    def from_placement(cls, placement: Placement) -> "PlacementResponse":
        dims = placement.default_dimensions
        return cls(
            area=placement.area,
            path_prefix=placement.path_prefix,
            description=placement.description,
            default_dimensions=DimensionsSchema(
                width=dims.width, height=dims.height, aspect_ratio=dims.aspect_ratio
            ),
            default_transformations=list(placement.default_transformations),
        )


# =============================================================================
# Resolution / URL Building
# =============================================================================

class ResolveResponse(BaseModel):
    """
    Returned by GET /media/resolve/{placeholder_id}.

    Example:
        {
            "placeholder_id": "about-hero-image",
            "public_id": "hero/about-hero",
            "resource_type": "image",
            "source": "link",
            "url": "https://res.cloudinary.com/demo/image/upload/c_fill,.../hero/about-hero",
            "srcset": [{"width": 640, "url": "..."}],
            "poster_url": null,
            "metadata": {"alt_text": "Clinic lobby"}
        }
    """
    placeholder_id: str
    public_id: str
    resource_type: ResourceType
    source: ResolutionSource
    url: str
    srcset: list[SourceSetItem] = Field(default_factory=list)
    poster_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class UrlResponse(BaseModel):
    """Returned by GET /media/url/{public_id}."""
    public_id: str
    resource_type: ResourceType
    url: str
    srcset: list[SourceSetItem] = Field(default_factory=list)
    poster_url: str | None = None


# =============================================================================
# Assets
# =============================================================================

class RegisterAssetRequest(BaseModel):
    """
    Body for POST /admin/assets, sent after an upload completes.

    Unknown keys are kept and stored in the asset's metadata bag.

    Example:
        {
            "public_id": "team/headshots/dr-smith",
            "resource_type": "image",
            "title": "Dr. Smith",
            "alt_text": "Dr. Smith in the clinic",
            "tags": ["team"]
        }
    """
    model_config = {"extra": "allow"}

    public_id: str = Field(..., min_length=1, description="Cloudinary public ID")
    resource_type: ResourceType | None = Field(
        None, description="Detected from the public ID when omitted"
    )
    title: str | None = None
    alt_text: str | None = None
    width: int | None = Field(None, gt=0)
    height: int | None = Field(None, gt=0)
    tags: list[str] | None = None

    def to_metadata(self) -> dict[str, Any]:
        """Everything except public_id, dropping unset fields."""
        data = self.model_dump(exclude={"public_id"}, exclude_none=True)
        if self.resource_type is not None:
            data["resource_type"] = self.resource_type.value
        return data


class AssetResponse(BaseModel):
    """A registered asset."""
    public_id: str
    resource_type: ResourceType
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_asset(cls, asset: PhysicalAsset) -> "AssetResponse":
        return cls(
            public_id=asset.public_id,
            resource_type=asset.resource_type,
            metadata=asset.metadata,
            created_at=asset.created_at,
            updated_at=asset.updated_at,
        )


class AssetList(BaseModel):
    """Page of registered assets."""
    assets: list[AssetResponse]
    count: int
    limit: int
    offset: int


class DeleteAssetResponse(BaseModel):
    """Returned by DELETE /admin/assets/{public_id}."""
    public_id: str
    deleted: bool = True
    unlinked_placeholders: list[str] = Field(default_factory=list)


# =============================================================================
# Links
# =============================================================================

class LinkRequest(BaseModel):
    """
    Body for PUT /admin/links/{placeholder_id}.

    Example:
        {"public_id": "hero/spring-campaign", "area": "hero"}
    """
    public_id: str = Field(..., min_length=1)
    area: MediaArea | None = None


class LinkResponse(BaseModel):
    """One placeholder -> asset link."""
    placeholder_id: str
    public_id: str
    area: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_link(cls, link: PlaceholderAssetLink) -> "LinkResponse":
        return cls(
            placeholder_id=link.placeholder_id,
            public_id=link.public_id,
            area=link.area,
            created_at=link.created_at,
            updated_at=link.updated_at,
        )


# =============================================================================
# Placeholders / Maintenance
# =============================================================================

class PlaceholderResponse(BaseModel):
    """A discovered placeholder, with its current link if any."""
    id: str
    area: MediaArea
    page: str
    section: str
    name: str | None = None
    description: str | None = None
    dimensions: DimensionsSchema | None = None
    public_id: str | None = None

    @classmethod
    def from_placeholder(
        cls,
        placeholder: LogicalPlaceholder,
        public_id: str | None = None,
    ) -> "PlaceholderResponse":
        dims = placeholder.dimensions
        return cls(
            id=placeholder.id,
            area=placeholder.area,
            page=placeholder.page,
            section=placeholder.section,
            name=placeholder.name,
            description=placeholder.description,
            dimensions=DimensionsSchema(
                width=dims.width, height=dims.height, aspect_ratio=dims.aspect_ratio
            ) if dims else None,
            public_id=public_id,
        )


class DuplicateLocationSchema(BaseModel):
    index: int
    page: str
    section: str


class DuplicateConflictSchema(BaseModel):
    id: str
    count: int
    locations: list[DuplicateLocationSchema]

    @classmethod
    def from_conflict(cls, conflict: DuplicateIdConflict) -> "DuplicateConflictSchema":
        return cls(**conflict.to_dict())


class DuplicateReport(BaseModel):
    """Returned by GET /admin/placeholders/duplicates."""
    total_placeholders: int
    duplicate_ids: int
    conflicts: list[DuplicateConflictSchema]
