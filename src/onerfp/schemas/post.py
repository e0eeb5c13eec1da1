"""Post-related Pydantic schemas."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .comment import MentionRef
from .profile import ProfileSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    content: str = Field("", max_length=50000, description="HTML content from the editor")
    image_urls: list[str] = Field(default_factory=list, max_length=10)
    tags: list[Any] = Field(default_factory=list, max_length=20)
    organization_id: int | None = Field(None, description="Target organization for org posts")
    mentions: list[MentionRef] = Field(
        default_factory=list, description="Users and organizations to notify"
    )


class PostUpdate(BaseModel):
    """Partial edit of a post."""

    content: str | None = Field(None, max_length=50000)
    image_urls: list[str] | None = Field(None, max_length=10)
    tags: list[Any] | None = Field(None, max_length=20)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    profile_id: str
    organization_id: int | None = None
    content: str
    image_urls: list[str] = Field(default_factory=list)
    tags: list[Any] = Field(default_factory=list)
    likes_count: int
    comments_count: int
    created_at: datetime
    updated_at: datetime
    author: ProfileSummary | None = None

    @field_validator("image_urls", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return value or []

    @field_validator("tags", mode="before")
    @classmethod
    def _decode_tags(cls, value: object) -> object:
        # Stored as JSON text; malformed values read as no tags.
        if value is None or value == "":
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                return []
        return value if isinstance(value, list) else []

    model_config = ConfigDict(from_attributes=True)
