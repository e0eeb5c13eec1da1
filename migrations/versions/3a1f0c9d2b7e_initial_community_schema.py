"""initial community schema

Revision ID: 3a1f0c9d2b7e
Revises:
Create Date: 2026-10-18 09:12:44.310527

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3a1f0c9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_REACTION_CHECK = (
    "reaction_type IS NULL OR reaction_type IN ('like', 'love', 'celebrate', 'insightful')"
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _reaction_table(name: str, fk_column: str, fk_target: str, unique_name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(fk_column, sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("reaction_type", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint([fk_column], [fk_target], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(fk_column, "user_id", name=unique_name),
        sa.CheckConstraint(_REACTION_CHECK, name=f"ck_{name}_type"),
    )


def upgrade() -> None:
    """Create profiles, organizations, the feed and the social graph."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("role", sa.Text(), nullable=True),
        sa.Column("organization_name", sa.Text(), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("is_omega_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "email_alerts_enabled", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("alert_keywords", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False, server_default="nonprofit"),
        sa.Column("tagline", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("banner_image_url", sa.Text(), nullable=True),
        sa.Column("mission_statement", sa.Text(), nullable=True),
        sa.Column("mission_image_url", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("year_founded", sa.Integer(), nullable=True),
        sa.Column("ein", sa.String(length=32), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "organization_categories",
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("organization_id", "category_id"),
    )
    op.create_table(
        "organization_memberships",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="member"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "profile_id", name="uq_membership_org_profile"),
        sa.CheckConstraint(
            "role IN ('member', 'admin', 'super_admin')", name="ck_membership_role"
        ),
    )
    op.create_index("ix_membership_profile_id", "organization_memberships", ["profile_id"])

    op.create_table(
        "organization_photos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("alt_text", sa.Text(), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_organization_photos_org_order",
        "organization_photos",
        ["organization_id", "display_order"],
    )
    for name, columns in (
        (
            "organization_impacts",
            [
                sa.Column("spotlights", sa.JSON(), nullable=False),
                sa.Column("testimonials", sa.JSON(), nullable=False),
            ],
        ),
        (
            "organization_north_stars",
            [
                sa.Column("blocks", sa.JSON(), nullable=False),
                sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
            ],
        ),
    ):
        op.create_table(
            name,
            sa.Column("organization_id", sa.Integer(), nullable=False),
            *columns,
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(
                ["organization_id"], ["organizations.id"], ondelete="CASCADE"
            ),
            sa.PrimaryKeyConstraint("organization_id"),
        )

    op.create_table(
        "followers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("follower_id", sa.String(length=36), nullable=False),
        sa.Column("following_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["follower_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["following_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_followers_pair"),
    )
    op.create_index("ix_followers_following_id", "followers", ["following_id"])
    for name in ("organization_follows", "organization_bookmarks"):
        op.create_table(
            name,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("organization_id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.String(length=36), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(
                ["organization_id"], ["organizations.id"], ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("organization_id", "user_id", name=f"uq_{name}_pair"),
        )
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("actor_id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["actor_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    def post_columns() -> list[sa.Column]:
        return [
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("content", sa.Text(), nullable=False),
            sa.Column("image_urls", sa.JSON(), nullable=True),
            sa.Column("tags", sa.Text(), nullable=True),
            sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("comments_count", sa.Integer(), nullable=False, server_default="0"),
        ]

    op.create_table(
        "posts",
        *post_columns(),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_profile_id", "posts", ["profile_id"])
    op.create_table(
        "organization_posts",
        *post_columns(),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_organization_posts_organization_id", "organization_posts", ["organization_id"]
    )

    for name, fk_column, fk_target, index_name in (
        ("post_comments", "post_id", "posts.id", "ix_post_comments_post_id"),
        (
            "organization_post_comments",
            "organization_post_id",
            "organization_posts.id",
            "ix_organization_post_comments_post_id",
        ),
    ):
        op.create_table(
            name,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(fk_column, sa.Integer(), nullable=False),
            sa.Column("user_id", sa.String(length=36), nullable=False),
            sa.Column("content", sa.Text(), nullable=False),
            sa.Column("image_urls", sa.JSON(), nullable=True),
            sa.Column("mentions", sa.JSON(), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint([fk_column], [fk_target], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(index_name, name, [fk_column])

    _reaction_table("post_likes", "post_id", "posts.id", "uq_post_likes_post_user")
    _reaction_table(
        "post_comment_likes",
        "comment_id",
        "post_comments.id",
        "uq_post_comment_likes_comment_user",
    )
    _reaction_table(
        "organization_post_likes",
        "organization_post_id",
        "organization_posts.id",
        "uq_organization_post_likes_post_user",
    )
    _reaction_table(
        "organization_post_comment_likes",
        "comment_id",
        "organization_post_comments.id",
        "uq_organization_post_comment_likes_comment_user",
    )

    op.create_table(
        "grants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("grant_name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_grants_created_at", "grants", ["created_at"])


def downgrade() -> None:
    """Drop every table created by ``upgrade``."""
    for name in (
        "grants",
        "organization_post_comment_likes",
        "organization_post_likes",
        "post_comment_likes",
        "post_likes",
        "organization_post_comments",
        "post_comments",
        "organization_posts",
        "posts",
        "notifications",
        "organization_bookmarks",
        "organization_follows",
        "followers",
        "organization_north_stars",
        "organization_impacts",
        "organization_photos",
        "organization_memberships",
        "organization_categories",
        "categories",
        "organizations",
        "profiles",
    ):
        op.drop_table(name)
