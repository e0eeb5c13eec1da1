"""Reaction Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

ReactionType = Literal["like", "love", "celebrate", "insightful"]


class ReactionCreate(BaseModel):
    reaction_type: ReactionType = "like"


class ReactionSummaryItem(BaseModel):
    type: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class ReactionState(BaseModel):
    """Caller's selection plus the aggregate tally for one post or comment."""

    selected_reaction: str | None
    total_count: int
    summary: list[ReactionSummaryItem]

    model_config = ConfigDict(from_attributes=True)


class Reactor(BaseModel):
    user_id: str
    full_name: str
    avatar_url: str | None = None
    title: str | None = None
    organization_name: str | None = None
    role: str | None = None
    reaction_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
