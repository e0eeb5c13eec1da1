"""Follow, bookmark and notification edges between profiles and organizations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onerfp.db.session import Base
from onerfp.db.time import utcnow

from .organization import Organization
from .profile import Profile

NOTIFICATION_NEW_FOLLOWER = "new_follower"
NOTIFICATION_MENTION = "mention"
NOTIFICATION_ORGANIZATION_MENTION = "organization_mention"


class ProfileFollow(Base):
    """Directed follow edge from one profile to another."""

    __tablename__ = "followers"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_followers_pair"),
        Index("ix_followers_following_id", "following_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    follower_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    following_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    follower: Mapped[Profile] = relationship("Profile", foreign_keys=[follower_id])
    following: Mapped[Profile] = relationship("Profile", foreign_keys=[following_id])


class OrganizationFollow(Base):
    """A profile following an organization's updates."""

    __tablename__ = "organization_follows"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_follows_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class OrganizationBookmark(Base):
    """A profile saving an organization for later."""

    __tablename__ = "organization_bookmarks"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_bookmarks_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    organization: Mapped[Organization] = relationship("Organization")


class Notification(Base):
    """In-app notification addressed to ``user_id`` about ``actor_id``'s action."""

    __tablename__ = "notifications"
    __table_args__ = (Index("ix_notifications_user_id", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    actor_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    # Set for mention notifications; at most one of the two is populated.
    post_id: Mapped[int | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=True
    )
    organization_post_id: Mapped[int | None] = mapped_column(
        ForeignKey("organization_posts.id", ondelete="CASCADE"), nullable=True
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    actor: Mapped[Profile] = relationship("Profile", foreign_keys=[actor_id], lazy="joined")
