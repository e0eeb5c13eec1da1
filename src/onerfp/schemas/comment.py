"""Comment-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .profile import ProfileSummary


class MentionRef(BaseModel):
    """Mention embedded in a comment, as recorded by the editor."""

    displayName: str
    id: str
    type: Literal["user", "organization"]


class CommentCreate(BaseModel):
    content: str = Field("", max_length=20000)
    image_urls: list[str] = Field(default_factory=list, max_length=4)
    mentions: list[MentionRef] = Field(default_factory=list)


class CommentUpdate(BaseModel):
    content: str | None = Field(None, max_length=20000)
    image_urls: list[str] | None = Field(None, max_length=4)
    mentions: list[MentionRef] | None = None


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: str
    content: str
    image_urls: list[str] = Field(default_factory=list)
    mentions: list[MentionRef] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    author: ProfileSummary | None = None

    @model_validator(mode="before")
    @classmethod
    def _unify_post_id(cls, data: object) -> object:
        # Organization comments point at their post through organization_post_id.
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            extracted["post_id"] = getattr(data, "post_id", None) or getattr(
                data, "organization_post_id", None
            )
            data = extracted
        return data

    @field_validator("image_urls", "mentions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return value or []

    model_config = ConfigDict(from_attributes=True)
