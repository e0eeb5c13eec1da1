"""Profile-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileSummary(BaseModel):
    """Compact author card embedded in posts, comments and member lists."""

    id: str
    full_name: str | None = None
    avatar_url: str | None = None
    title: str | None = None
    organization_name: str | None = None
    role: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(ProfileSummary):
    """Full public profile."""

    bio: str | None = None
    is_omega_admin: bool = False
    created_at: datetime


class MyProfileResponse(ProfileResponse):
    """Profile as seen by its owner, including private alert settings."""

    email: str | None = None
    email_alerts_enabled: bool = False
    alert_keywords: list[str] | None = None


class ProfileUpdate(BaseModel):
    """Partial update submitted by the settings forms."""

    full_name: str | None = Field(None, max_length=200)
    avatar_url: str | None = None
    role: str | None = Field(None, max_length=100)
    organization_name: str | None = Field(None, max_length=200)
    title: str | None = Field(None, max_length=200)
    bio: str | None = Field(None, max_length=5000)
    email: str | None = Field(None, max_length=320)
    email_alerts_enabled: bool | None = None
    alert_keywords: list[str] | None = Field(None, max_length=50)


class FollowState(BaseModel):
    """Result of toggling a follow edge."""

    is_following: bool
    followers_count: int

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    id: int
    type: str
    is_read: bool
    post_id: int | None = None
    organization_post_id: int | None = None
    created_at: datetime
    actor: ProfileSummary

    model_config = ConfigDict(from_attributes=True)


class NotificationsMarkedRead(BaseModel):
    updated: int
