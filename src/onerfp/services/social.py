"""Follow and bookmark edges between profiles and organizations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from onerfp.models import (
    NOTIFICATION_NEW_FOLLOWER,
    Notification,
    Organization,
    OrganizationBookmark,
    OrganizationFollow,
    Profile,
    ProfileFollow,
)

from .errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class FollowState:
    is_following: bool
    followers_count: int


@dataclass
class OrganizationSocialState:
    is_following: bool
    followers_count: int
    is_bookmarked: bool
    bookmarks_count: int


def _require_profile(db: Session, profile_id: str) -> Profile:
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def _follow_edge(db: Session, follower_id: str, following_id: str) -> ProfileFollow | None:
    return db.query(ProfileFollow).filter(
        ProfileFollow.follower_id == follower_id,
        ProfileFollow.following_id == following_id,
    ).first()


def followers_count(db: Session, profile_id: str) -> int:
    return (
        db.query(func.count(ProfileFollow.id))
        .filter(ProfileFollow.following_id == profile_id)
        .scalar()
        or 0
    )


def following_count(db: Session, profile_id: str) -> int:
    return (
        db.query(func.count(ProfileFollow.id))
        .filter(ProfileFollow.follower_id == profile_id)
        .scalar()
        or 0
    )


def is_following(db: Session, follower_id: str, following_id: str) -> bool:
    return _follow_edge(db, follower_id, following_id) is not None


def _notify_new_follower(db: Session, follower_id: str, following_id: str) -> None:
    try:
        db.add(
            Notification(
                user_id=following_id,
                actor_id=follower_id,
                type=NOTIFICATION_NEW_FOLLOWER,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning(
            "Could not record follower notification for %s", following_id, exc_info=True
        )


def follow_profile(db: Session, follower_id: str, following_id: str) -> ProfileFollow:
    """Create the follow edge and notify the followed profile.

    Raises:
        ValidationError: when a profile tries to follow itself.
        ConflictError: when the edge already exists.
        NotFoundError: when the followed profile does not exist.
    """
    if follower_id == following_id:
        raise ValidationError("You cannot follow yourself")
    _require_profile(db, following_id)
    if _follow_edge(db, follower_id, following_id) is not None:
        raise ConflictError("Already following this profile")

    edge = ProfileFollow(follower_id=follower_id, following_id=following_id)
    db.add(edge)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Already following this profile") from exc
    db.refresh(edge)

    _notify_new_follower(db, follower_id, following_id)
    return edge


def unfollow_profile(db: Session, follower_id: str, following_id: str) -> None:
    edge = _follow_edge(db, follower_id, following_id)
    if edge is None:
        raise NotFoundError("Not following this profile")
    db.delete(edge)
    db.commit()


def toggle_profile_follow(db: Session, follower_id: str, following_id: str) -> FollowState:
    """Follow if not following, unfollow otherwise; return the new state."""
    if is_following(db, follower_id, following_id):
        unfollow_profile(db, follower_id, following_id)
        now_following = False
    else:
        follow_profile(db, follower_id, following_id)
        now_following = True
    return FollowState(
        is_following=now_following,
        followers_count=followers_count(db, following_id),
    )


def list_following(db: Session, profile_id: str) -> list[Profile]:
    """Profiles that ``profile_id`` follows, most recent first."""
    return (
        db.query(Profile)
        .join(ProfileFollow, ProfileFollow.following_id == Profile.id)
        .filter(ProfileFollow.follower_id == profile_id)
        .order_by(ProfileFollow.created_at.desc(), ProfileFollow.id.desc())
        .all()
    )


def list_followers(db: Session, profile_id: str) -> list[Profile]:
    """Profiles following ``profile_id``, most recent first."""
    return (
        db.query(Profile)
        .join(ProfileFollow, ProfileFollow.follower_id == Profile.id)
        .filter(ProfileFollow.following_id == profile_id)
        .order_by(ProfileFollow.created_at.desc(), ProfileFollow.id.desc())
        .all()
    )


def following_ids(db: Session, profile_id: str) -> set[str]:
    rows = (
        db.query(ProfileFollow.following_id)
        .filter(ProfileFollow.follower_id == profile_id)
        .all()
    )
    return {row[0] for row in rows}


def _require_organization(db: Session, organization_id: int) -> Organization:
    organization = db.query(Organization).filter(Organization.id == organization_id).first()
    if organization is None:
        raise NotFoundError("Organization not found")
    return organization


def organization_social_state(
    db: Session,
    organization_id: int,
    user_id: str | None,
) -> OrganizationSocialState:
    """Exact follow/bookmark counts plus the caller's own flags."""
    followers = (
        db.query(func.count(OrganizationFollow.id))
        .filter(OrganizationFollow.organization_id == organization_id)
        .scalar()
        or 0
    )
    bookmarks = (
        db.query(func.count(OrganizationBookmark.id))
        .filter(OrganizationBookmark.organization_id == organization_id)
        .scalar()
        or 0
    )
    following = bookmarked = False
    if user_id is not None:
        following = db.query(OrganizationFollow.id).filter(
            OrganizationFollow.organization_id == organization_id,
            OrganizationFollow.user_id == user_id,
        ).first() is not None
        bookmarked = db.query(OrganizationBookmark.id).filter(
            OrganizationBookmark.organization_id == organization_id,
            OrganizationBookmark.user_id == user_id,
        ).first() is not None
    return OrganizationSocialState(
        is_following=following,
        followers_count=followers,
        is_bookmarked=bookmarked,
        bookmarks_count=bookmarks,
    )


def _existing_edge(db: Session, model: type, organization_id: int, user_id: str) -> Any:
    return db.query(model).filter(
        model.organization_id == organization_id,
        model.user_id == user_id,
    ).first()


def _toggle_edge(db: Session, model: type, organization_id: int, user_id: str) -> None:
    _require_organization(db, organization_id)
    existing = _existing_edge(db, model, organization_id, user_id)
    if existing is not None:
        db.delete(existing)
        db.commit()
        return
    try:
        with db.begin_nested():
            db.add(model(organization_id=organization_id, user_id=user_id))
            db.flush()
    except IntegrityError:
        # A concurrent request created the same edge; keep it.
        if _existing_edge(db, model, organization_id, user_id) is None:
            raise
    db.commit()


def toggle_organization_follow(
    db: Session, organization_id: int, user_id: str
) -> OrganizationSocialState:
    _toggle_edge(db, OrganizationFollow, organization_id, user_id)
    return organization_social_state(db, organization_id, user_id)


def toggle_organization_bookmark(
    db: Session, organization_id: int, user_id: str
) -> OrganizationSocialState:
    _toggle_edge(db, OrganizationBookmark, organization_id, user_id)
    return organization_social_state(db, organization_id, user_id)


def list_bookmarked_organizations(db: Session, user_id: str) -> list[Organization]:
    """Organizations the user bookmarked, most recent first."""
    return (
        db.query(Organization)
        .join(OrganizationBookmark, OrganizationBookmark.organization_id == Organization.id)
        .filter(OrganizationBookmark.user_id == user_id)
        .order_by(OrganizationBookmark.created_at.desc(), OrganizationBookmark.id.desc())
        .all()
    )
