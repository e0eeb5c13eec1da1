"""SQLAlchemy models for feed posts and their comments.

Member posts and organization posts live in two tables with the same shape;
``onerfp.services.feed_tables`` maps a ``PostKind`` to the right pair.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onerfp.db.session import Base
from onerfp.db.time import utcnow

from .organization import Organization
from .profile import Profile


class _PostColumns:
    """Columns shared by member and organization posts."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # HTML produced by the rich-text editor.
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_urls: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    # JSON-encoded list of tag objects, stored as text.
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Denormalized counters refreshed by the procedures module.
    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def tag_list(self) -> list[Any]:
        """Return ``tags`` decoded; malformed values read as no tags."""
        if not self.tags:
            return []
        try:
            decoded = json.loads(self.tags)
        except ValueError:
            return []
        return decoded if isinstance(decoded, list) else []


class Post(_PostColumns, Base):
    """Post authored by a member on their own behalf."""

    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_profile_id", "profile_id"),)

    profile_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )

    author: Mapped[Profile] = relationship("Profile", lazy="joined")


class OrganizationPost(_PostColumns, Base):
    """Post published on an organization's page by one of its editors."""

    __tablename__ = "organization_posts"
    __table_args__ = (Index("ix_organization_posts_organization_id", "organization_id"),)

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    profile_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )

    author: Mapped[Profile] = relationship("Profile", lazy="joined")
    organization: Mapped[Organization] = relationship("Organization", lazy="joined")


class _CommentColumns:
    """Columns shared by comments on either post kind."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    # HTML with embedded mention spans.
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_urls: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    # [{"displayName": ..., "id": ..., "type": "user" | "organization"}]
    mentions: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class PostComment(_CommentColumns, Base):
    """Comment on a member post."""

    __tablename__ = "post_comments"
    __table_args__ = (Index("ix_post_comments_post_id", "post_id"),)

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    )

    author: Mapped[Profile] = relationship("Profile", lazy="joined")


class OrganizationPostComment(_CommentColumns, Base):
    """Comment on an organization post."""

    __tablename__ = "organization_post_comments"
    __table_args__ = (
        Index("ix_organization_post_comments_post_id", "organization_post_id"),
    )

    organization_post_id: Mapped[int] = mapped_column(
        ForeignKey("organization_posts.id", ondelete="CASCADE"), nullable=False
    )

    author: Mapped[Profile] = relationship("Profile", lazy="joined")
