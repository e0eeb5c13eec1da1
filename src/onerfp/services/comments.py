"""Comments on member and organization posts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.orm import Session

from onerfp.db.time import utcnow
from onerfp.models import Profile

from . import notifications, procedures
from .errors import NotFoundError, PermissionDeniedError, ValidationError
from .feed_tables import PostKind, tables_for
from .posts import get_post

logger = logging.getLogger(__name__)


def _clean(content: str | None, image_urls: Iterable[str] | None) -> tuple[str, list[str] | None]:
    images = [url for url in (image_urls or []) if url] or None
    text = (content or "").strip()
    if not text and not images:
        raise ValidationError("Comment cannot be empty")
    return text, images


def _new_mentions(
    before: list[dict[str, Any]] | None, after: list[dict[str, Any]] | None
) -> list[dict[str, Any]]:
    known = {(m.get("type"), m.get("id")) for m in before or []}
    return [m for m in after or [] if (m.get("type"), m.get("id")) not in known]


def get_comment(db: Session, kind: PostKind, comment_id: int) -> Any:
    model = tables_for(kind).comment
    comment = db.query(model).filter(model.id == comment_id).first()
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def list_comments(db: Session, kind: PostKind, post_id: int) -> list[Any]:
    """Comments on a post, oldest first."""
    get_post(db, kind, post_id)
    tables = tables_for(kind)
    model = tables.comment
    return (
        db.query(model)
        .filter(tables.post_fk_column(model) == post_id)
        .order_by(model.created_at.asc(), model.id.asc())
        .all()
    )


def add_comment(
    db: Session,
    kind: PostKind,
    post_id: int,
    author: Profile,
    *,
    content: str | None,
    image_urls: Iterable[str] | None = None,
    mentions: list[dict[str, Any]] | None = None,
) -> Any:
    """Insert a comment, refresh the post's comment counter and notify mentions."""
    post = get_post(db, kind, post_id)
    text, images = _clean(content, image_urls)

    tables = tables_for(kind)
    comment = tables.comment(
        **{tables.post_fk: post_id},
        user_id=author.id,
        content=text,
        image_urls=images,
        mentions=mentions or None,
    )
    db.add(comment)
    if kind is PostKind.MEMBER:
        post.comments_count = (post.comments_count or 0) + 1
        db.add(post)
    db.commit()
    db.refresh(comment)

    if kind is PostKind.ORGANIZATION:
        procedures.run_best_effort(
            db, procedures.update_organization_post_comments_count, post_id
        )
    notifications.create_mention_notifications(db, kind, post_id, mentions, author.id)
    return comment


def edit_comment(
    db: Session,
    kind: PostKind,
    comment_id: int,
    actor: Profile,
    changes: dict[str, Any],
) -> Any:
    """Owner-only edit of content, images or mentions.

    Only mentions added by the edit are notified.
    """
    comment = get_comment(db, kind, comment_id)
    if comment.user_id != actor.id:
        raise PermissionDeniedError("You can only edit your own comments")

    text, images = _clean(
        changes.get("content", comment.content),
        changes["image_urls"] if "image_urls" in changes else comment.image_urls,
    )
    added_mentions: list[dict[str, Any]] = []
    comment.content = text
    comment.image_urls = images
    if "mentions" in changes:
        added_mentions = _new_mentions(comment.mentions, changes["mentions"])
        comment.mentions = changes["mentions"] or None
    comment.updated_at = utcnow()
    db.add(comment)
    db.commit()
    db.refresh(comment)

    post_id = getattr(comment, tables_for(kind).post_fk)
    notifications.create_mention_notifications(db, kind, post_id, added_mentions, actor.id)
    return comment


def delete_comment(db: Session, kind: PostKind, comment_id: int, actor: Profile) -> None:
    comment = get_comment(db, kind, comment_id)
    if comment.user_id != actor.id and not actor.is_omega_admin:
        raise PermissionDeniedError("You can only delete your own comments")

    tables = tables_for(kind)
    post_id = getattr(comment, tables.post_fk)
    db.query(tables.comment_reaction).filter(
        tables.comment_reaction.comment_id == comment_id
    ).delete(synchronize_session=False)
    db.delete(comment)
    if kind is PostKind.MEMBER:
        post = get_post(db, kind, post_id)
        post.comments_count = max((post.comments_count or 0) - 1, 0)
        db.add(post)
    db.commit()
    logger.info("Deleted %s comment %s by %s", kind.value, comment_id, actor.id)

    if kind is PostKind.ORGANIZATION:
        procedures.run_best_effort(
            db, procedures.update_organization_post_comments_count, post_id
        )
