"""Organization page Pydantic schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .profile import ProfileSummary


class OrganizationResponse(BaseModel):
    """Public organization page header and about section."""

    id: int
    slug: str
    name: str
    type: str
    tagline: str | None = None
    description: str | None = None
    image_url: str | None = None
    banner_image_url: str | None = None
    mission_statement: str | None = None
    mission_image_url: str | None = None
    location: str | None = None
    website: str | None = None
    year_founded: int | None = None
    ein: str | None = None
    focus_areas: list[str] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrganizationUpdate(BaseModel):
    """Partial edit of the organization's profile fields."""

    name: str | None = Field(None, min_length=1, max_length=300)
    type: str | None = Field(None, max_length=64)
    tagline: str | None = Field(None, max_length=500)
    description: str | None = None
    image_url: str | None = None
    banner_image_url: str | None = None
    location: str | None = Field(None, max_length=300)
    website: str | None = Field(None, max_length=500)
    year_founded: int | None = Field(None, ge=1600, le=2100)
    ein: str | None = Field(None, max_length=32)


class MissionUpdate(BaseModel):
    mission_statement: str | None = None
    mission_image_url: str | None = None


class FocusAreasUpdate(BaseModel):
    focus_areas: list[str] = Field(default_factory=list, max_length=50)


class FocusAreasResponse(BaseModel):
    focus_areas: list[str]


class PhotoCreate(BaseModel):
    image_url: str = Field(..., min_length=1)
    caption: str | None = None
    alt_text: str | None = None
    is_featured: bool = False


class PhotoUpdate(BaseModel):
    caption: str | None = None
    alt_text: str | None = None
    is_featured: bool | None = None


class PhotoOrder(BaseModel):
    photo_ids: list[int]


class PhotoResponse(BaseModel):
    id: int
    organization_id: int
    image_url: str
    caption: str | None = None
    alt_text: str | None = None
    is_featured: bool
    display_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ImpactDocument(BaseModel):
    """Spotlight stories and testimonials; entries are free-form objects."""

    spotlights: list[dict[str, Any]] = Field(default_factory=list)
    testimonials: list[dict[str, Any]] = Field(default_factory=list)
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NorthStarDocument(BaseModel):
    """Block-based story page; each block is a free-form object."""

    blocks: list[dict[str, Any]] = Field(default_factory=list)
    is_published: bool = False
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SocialState(BaseModel):
    is_following: bool
    followers_count: int
    is_bookmarked: bool
    bookmarks_count: int

    model_config = ConfigDict(from_attributes=True)


class MembershipResponse(BaseModel):
    id: int
    organization_id: int
    role: str
    role_label: str
    joined_at: datetime
    is_public: bool
    profile: ProfileSummary


class TeamResponse(BaseModel):
    """Members split into the groups shown on the team tab."""

    total: int
    leadership: list[MembershipResponse]
    board: list[MembershipResponse]
    staff: list[MembershipResponse]
    can_manage: bool = False


class RoleChange(BaseModel):
    role: Literal["member", "admin", "super_admin"]
