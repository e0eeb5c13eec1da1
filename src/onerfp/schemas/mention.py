"""Mention search result schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class MentionResult(BaseModel):
    id: str
    name: str | None = None
    type: Literal["user", "organization"]
    avatar_url: str | None = None
    title: str | None = None
    organization_name: str | None = None
    role: str | None = None

    model_config = ConfigDict(from_attributes=True)
