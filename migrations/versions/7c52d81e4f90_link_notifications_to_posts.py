"""link notifications to posts

Revision ID: 7c52d81e4f90
Revises: 3a1f0c9d2b7e
Create Date: 2026-10-18 14:03:27.118204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7c52d81e4f90"
down_revision: Union[str, Sequence[str], None] = "3a1f0c9d2b7e"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("notifications") as batch_op:
        batch_op.add_column(sa.Column("post_id", sa.Integer(), nullable=True))
        batch_op.add_column(sa.Column("organization_post_id", sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            "fk_notifications_post_id_posts",
            "posts",
            ["post_id"],
            ["id"],
            ondelete="CASCADE",
        )
        batch_op.create_foreign_key(
            "fk_notifications_organization_post_id_organization_posts",
            "organization_posts",
            ["organization_post_id"],
            ["id"],
            ondelete="CASCADE",
        )


def downgrade() -> None:
    with op.batch_alter_table("notifications") as batch_op:
        batch_op.drop_constraint(
            "fk_notifications_organization_post_id_organization_posts", type_="foreignkey"
        )
        batch_op.drop_constraint("fk_notifications_post_id_posts", type_="foreignkey")
        batch_op.drop_column("organization_post_id")
        batch_op.drop_column("post_id")
