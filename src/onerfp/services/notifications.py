"""In-app notifications: listing, read state and @-mention fan-out."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from onerfp.models import (
    NOTIFICATION_MENTION,
    NOTIFICATION_ORGANIZATION_MENTION,
    Notification,
    Organization,
    OrganizationMembership,
    Profile,
)

from .errors import NotFoundError
from .feed_tables import PostKind, tables_for

logger = logging.getLogger(__name__)


def list_notifications(
    db: Session,
    user_id: str,
    limit: int = 50,
    unread_only: bool = False,
) -> list[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def mark_notification_read(db: Session, user_id: str, notification_id: int) -> Notification:
    """Mark one of the caller's notifications read.

    Raises:
        NotFoundError: when the notification does not exist or belongs to
            someone else.
    """
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id,
    ).first()
    if notification is None:
        raise NotFoundError("Notification not found")
    if not notification.is_read:
        notification.is_read = True
        db.add(notification)
        db.commit()
        db.refresh(notification)
    return notification


def mark_all_notifications_read(db: Session, user_id: str) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session="fetch")
    )
    db.commit()
    return updated


def _resolve_organization(db: Session, mention_id: str) -> Organization | None:
    # Organization mentions carry the slug, or "{type}-{id}" when there is none.
    organization = db.query(Organization).filter(Organization.slug == mention_id).first()
    if organization is not None:
        return organization
    org_type, _, raw_id = mention_id.rpartition("-")
    if not org_type or not raw_id.isdigit():
        return None
    return db.query(Organization).filter(
        Organization.id == int(raw_id),
        Organization.type == org_type,
    ).first()


def mention_recipients(
    db: Session,
    mentions: Iterable[dict[str, Any]],
    actor_id: str,
) -> list[tuple[str, str]]:
    """``(profile_id, notification_type)`` pairs for a set of mentions.

    Mentioned users come first, then the members of each mentioned
    organization. The actor and anyone already listed are skipped, so a user
    mentioned directly is not notified again as an organization member.
    """
    mentions = list(mentions)
    user_ids = [str(m["id"]) for m in mentions if m.get("type") == "user" and m.get("id")]
    known: set[str] = set()
    if user_ids:
        rows = db.query(Profile.id).filter(Profile.id.in_(user_ids)).all()
        known = {row[0] for row in rows}

    seen = {actor_id}
    recipients: list[tuple[str, str]] = []
    for user_id in user_ids:
        if user_id in known and user_id not in seen:
            seen.add(user_id)
            recipients.append((user_id, NOTIFICATION_MENTION))

    for mention in mentions:
        if mention.get("type") != "organization":
            continue
        organization = _resolve_organization(db, str(mention.get("id") or ""))
        if organization is None:
            logger.info("Skipping mention of unknown organization %r", mention.get("id"))
            continue
        members = (
            db.query(OrganizationMembership.profile_id)
            .filter(OrganizationMembership.organization_id == organization.id)
            .order_by(OrganizationMembership.id.asc())
            .all()
        )
        for (profile_id,) in members:
            if profile_id not in seen:
                seen.add(profile_id)
                recipients.append((profile_id, NOTIFICATION_ORGANIZATION_MENTION))
    return recipients


def create_mention_notifications(
    db: Session,
    kind: PostKind,
    post_id: int,
    mentions: Iterable[dict[str, Any]] | None,
    actor_id: str,
) -> int:
    """Notify everyone mentioned in a post or comment; return how many rows were added.

    Runs after the post or comment is committed. A failure is logged and
    rolled back without affecting the caller.
    """
    mentions = list(mentions or [])
    if not mentions:
        return 0
    post_fk = tables_for(kind).post_fk
    try:
        recipients = mention_recipients(db, mentions, actor_id)
        for profile_id, notification_type in recipients:
            db.add(
                Notification(
                    user_id=profile_id,
                    actor_id=actor_id,
                    type=notification_type,
                    **{post_fk: post_id},
                )
            )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning(
            "Could not record mention notifications for %s post %s",
            kind.value, post_id, exc_info=True,
        )
        return 0
    if recipients:
        logger.info(
            "Sent %d mention notifications for %s post %s", len(recipients), kind.value, post_id
        )
    return len(recipients)
