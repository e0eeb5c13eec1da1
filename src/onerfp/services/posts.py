"""Create, read, edit and delete feed posts of either kind."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy.orm import Session

from onerfp.models import Notification, Organization, Profile

from . import notifications
from .errors import NotFoundError, PermissionDeniedError, ValidationError
from .feed_tables import PostKind, tables_for
from .permissions import Permission, actor_has_permission, require_permission

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def encode_tags(tags: Sequence[Any] | None) -> str | None:
    """Serialize tags for the text column; empty lists are stored as NULL."""
    if not tags:
        return None
    return json.dumps(list(tags))


def _normalize_images(image_urls: Iterable[str] | None) -> list[str] | None:
    cleaned = [url for url in (image_urls or []) if url]
    return cleaned or None


def _clean_content(content: str | None, image_urls: list[str] | None) -> str:
    text = (content or "").strip()
    if not text and not image_urls:
        raise ValidationError("Post content cannot be empty")
    return text


def get_post(db: Session, kind: PostKind, post_id: int) -> Any:
    model = tables_for(kind).post
    post = db.query(model).filter(model.id == post_id).first()
    if post is None:
        raise NotFoundError("Post not found")
    return post


def list_posts(
    db: Session,
    kind: PostKind,
    *,
    limit: int = 20,
    before_id: int | None = None,
    organization_id: int | None = None,
    author_ids: Iterable[str] | None = None,
) -> list[Any]:
    """Newest-first page of posts.

    ``before_id`` continues from the last id of the previous page;
    ``author_ids`` restricts a member feed to the given authors.
    """
    model = tables_for(kind).post
    query = db.query(model)
    if before_id is not None:
        query = query.filter(model.id < before_id)
    if organization_id is not None and kind is PostKind.ORGANIZATION:
        query = query.filter(model.organization_id == organization_id)
    if author_ids is not None:
        ids = list(author_ids)
        if not ids:
            return []
        query = query.filter(model.profile_id.in_(ids))
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return query.order_by(model.created_at.desc(), model.id.desc()).limit(limit).all()


def create_post(
    db: Session,
    kind: PostKind,
    author: Profile,
    *,
    content: str | None,
    image_urls: Iterable[str] | None = None,
    tags: Sequence[Any] | None = None,
    organization_id: int | None = None,
    mentions: list[dict[str, Any]] | None = None,
) -> Any:
    """Persist a new post and notify anyone it mentions.

    Organization posts require ``edit_organization`` on the target
    organization.
    """
    images = _normalize_images(image_urls)
    text = _clean_content(content, images)
    model = tables_for(kind).post
    fields: dict[str, Any] = {
        "profile_id": author.id,
        "content": text,
        "image_urls": images,
        "tags": encode_tags(tags),
    }

    if kind is PostKind.ORGANIZATION:
        if organization_id is None:
            raise ValidationError("organization_id is required for organization posts")
        organization = db.query(Organization).filter(Organization.id == organization_id).first()
        if organization is None:
            raise NotFoundError("Organization not found")
        require_permission(db, author, organization_id, Permission.EDIT_ORGANIZATION)
        fields["organization_id"] = organization_id

    post = model(**fields)
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Created %s post %s by %s", kind.value, post.id, author.id)
    notifications.create_mention_notifications(db, kind, post.id, mentions, author.id)
    return post


def _can_moderate(db: Session, kind: PostKind, post: Any, actor: Profile) -> bool:
    if post.profile_id == actor.id:
        return True
    if kind is PostKind.ORGANIZATION:
        return actor_has_permission(
            db, actor, post.organization_id, Permission.EDIT_ORGANIZATION
        )
    return False


def update_post(
    db: Session,
    kind: PostKind,
    post_id: int,
    actor: Profile,
    changes: dict[str, Any],
) -> Any:
    """Apply a partial edit to a post's content, images or tags."""
    post = get_post(db, kind, post_id)
    if not _can_moderate(db, kind, post, actor):
        raise PermissionDeniedError("You can only edit your own posts")

    images = post.image_urls
    if "image_urls" in changes:
        images = _normalize_images(changes["image_urls"])
    content = changes.get("content", post.content)
    post.content = _clean_content(content, images)
    post.image_urls = images
    if "tags" in changes:
        post.tags = encode_tags(changes["tags"])

    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, kind: PostKind, post_id: int, actor: Profile) -> None:
    post = get_post(db, kind, post_id)
    if not (actor.is_omega_admin or _can_moderate(db, kind, post, actor)):
        raise PermissionDeniedError("You can only delete your own posts")

    # Explicit child cleanup; SQLite does not enforce ON DELETE CASCADE by default.
    tables = tables_for(kind)
    comment_ids = db.query(tables.comment.id).filter(
        tables.post_fk_column(tables.comment) == post_id
    )
    db.query(tables.comment_reaction).filter(
        tables.comment_reaction.comment_id.in_(comment_ids.scalar_subquery())
    ).delete(synchronize_session=False)
    db.query(tables.comment).filter(
        tables.post_fk_column(tables.comment) == post_id
    ).delete(synchronize_session=False)
    db.query(tables.post_reaction).filter(
        tables.post_fk_column(tables.post_reaction) == post_id
    ).delete(synchronize_session=False)
    db.query(Notification).filter(
        tables.post_fk_column(Notification) == post_id
    ).delete(synchronize_session=False)
    db.delete(post)
    db.commit()
    logger.info("Deleted %s post %s by %s", kind.value, post_id, actor.id)
