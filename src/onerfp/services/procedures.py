"""Database procedures invoked by the feed and alert services.

Counter procedures recount rows rather than increment, so any drift left by a
failed refresh is repaired by the next successful one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from onerfp.models import (
    OrganizationPost,
    OrganizationPostComment,
    OrganizationPostLike,
    Post,
    PostLike,
    Profile,
)

from .email import EmailSender, get_email_sender

logger = logging.getLogger(__name__)


def _recount(db: Session, post_model: type, post_id: int, column: str, count: int) -> int:
    db.query(post_model).filter(post_model.id == post_id).update(
        {column: count}, synchronize_session="fetch"
    )
    db.commit()
    return count


def update_post_likes_count(db: Session, post_id: int) -> int:
    """Set ``posts.likes_count`` to the number of reaction rows on the post."""
    count = db.query(func.count(PostLike.id)).filter(PostLike.post_id == post_id).scalar() or 0
    return _recount(db, Post, post_id, "likes_count", count)


def update_organization_post_likes_count(db: Session, post_id: int) -> int:
    """Set ``organization_posts.likes_count`` from its reaction rows."""
    count = (
        db.query(func.count(OrganizationPostLike.id))
        .filter(OrganizationPostLike.organization_post_id == post_id)
        .scalar()
        or 0
    )
    return _recount(db, OrganizationPost, post_id, "likes_count", count)


def update_organization_post_comments_count(db: Session, post_id: int) -> int:
    """Set ``organization_posts.comments_count`` from its comment rows."""
    count = (
        db.query(func.count(OrganizationPostComment.id))
        .filter(OrganizationPostComment.organization_post_id == post_id)
        .scalar()
        or 0
    )
    return _recount(db, OrganizationPost, post_id, "comments_count", count)


def run_best_effort(db: Session, procedure: Callable[[Session, int], int], post_id: int) -> None:
    """Call a counter procedure, logging instead of raising on failure."""
    try:
        procedure(db, post_id)
    except SQLAlchemyError:
        db.rollback()
        logger.warning(
            "Counter refresh %s failed for post %s",
            getattr(procedure, "__name__", procedure),
            post_id,
            exc_info=True,
        )


def search_profiles(db: Session, term: str, limit: int = 5) -> list[Profile]:
    """Return profiles whose name, title or organization contains ``term``."""
    pattern = f"%{term}%"
    return (
        db.query(Profile)
        .filter(
            or_(
                Profile.full_name.ilike(pattern),
                Profile.title.ilike(pattern),
                Profile.organization_name.ilike(pattern),
            )
        )
        .order_by(Profile.full_name)
        .limit(limit)
        .all()
    )


def send_custom_email(
    email: str,
    subject: str,
    html_content: str,
    sender: EmailSender | None = None,
) -> None:
    """Deliver an HTML email; raises ``EmailError`` subclasses on failure."""
    (sender or get_email_sender()).send(email, subject, html_content)
