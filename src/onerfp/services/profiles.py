"""CRUD-style helpers for member profiles."""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from onerfp.models import Profile

from .errors import NotFoundError

__all__ = [
    "get_profile",
    "update_profile",
]


def get_profile(db: Session, profile_id: str) -> Profile:
    """Return a single profile by id."""
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def update_profile(db: Session, profile: Profile, changes: dict[str, Any]) -> Profile:
    """Apply partial updates from the settings forms."""
    if "alert_keywords" in changes and changes["alert_keywords"] is not None:
        keywords = [k.strip() for k in changes["alert_keywords"] if k and k.strip()]
        changes = {**changes, "alert_keywords": keywords or None}
    for key, value in changes.items():
        setattr(profile, key, value)

    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
