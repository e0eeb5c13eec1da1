"""Mention autocomplete endpoint."""

from fastapi import APIRouter, Query

from onerfp.api.v1.dependencies import CurrentUserDep, SessionDep
from onerfp.schemas import MentionResult
from onerfp.services.mentions import search_mentions

router = APIRouter(prefix="/mentions", tags=["mentions"])


@router.get("/search", response_model=list[MentionResult])
async def search(
    current_user: CurrentUserDep,
    db: SessionDep,
    q: str = Query("", max_length=100, description="Text typed after '@'"),
) -> list[MentionResult]:
    """Profiles then organizations whose names contain ``q``."""
    return [
        MentionResult.model_validate(result, from_attributes=True)
        for result in search_mentions(db, q)
    ]
