"""Reaction rows attached to posts and comments.

Each table holds at most one row per (entity, user); changing a reaction
updates ``reaction_type`` in place.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from onerfp.db.session import Base
from onerfp.db.time import utcnow

# Canonical order; also the display order when counts tie.
REACTION_TYPES = ("like", "love", "celebrate", "insightful")
DEFAULT_REACTION = "like"

_REACTION_CHECK = "reaction_type IS NULL OR reaction_type IN ('like', 'love', 'celebrate', 'insightful')"


class _ReactionColumns:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    # Legacy rows predate reaction types; NULL reads as "like".
    reaction_type: Mapped[str | None] = mapped_column(
        String(32), nullable=True, default=DEFAULT_REACTION
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class PostLike(_ReactionColumns, Base):
    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
        CheckConstraint(_REACTION_CHECK, name="ck_post_likes_type"),
    )

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    )


class PostCommentLike(_ReactionColumns, Base):
    __tablename__ = "post_comment_likes"
    __table_args__ = (
        UniqueConstraint("comment_id", "user_id", name="uq_post_comment_likes_comment_user"),
        CheckConstraint(_REACTION_CHECK, name="ck_post_comment_likes_type"),
    )

    comment_id: Mapped[int] = mapped_column(
        ForeignKey("post_comments.id", ondelete="CASCADE"), nullable=False
    )


class OrganizationPostLike(_ReactionColumns, Base):
    __tablename__ = "organization_post_likes"
    __table_args__ = (
        UniqueConstraint(
            "organization_post_id", "user_id", name="uq_organization_post_likes_post_user"
        ),
        CheckConstraint(_REACTION_CHECK, name="ck_organization_post_likes_type"),
    )

    organization_post_id: Mapped[int] = mapped_column(
        ForeignKey("organization_posts.id", ondelete="CASCADE"), nullable=False
    )


class OrganizationPostCommentLike(_ReactionColumns, Base):
    __tablename__ = "organization_post_comment_likes"
    __table_args__ = (
        UniqueConstraint(
            "comment_id", "user_id", name="uq_organization_post_comment_likes_comment_user"
        ),
        CheckConstraint(_REACTION_CHECK, name="ck_organization_post_comment_likes_type"),
    )

    comment_id: Mapped[int] = mapped_column(
        ForeignKey("organization_post_comments.id", ondelete="CASCADE"), nullable=False
    )
