"""SQLAlchemy model for member profiles."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from onerfp.db.session import Base
from onerfp.db.time import utcnow


def new_profile_id() -> str:
    """Return a fresh profile identifier (auth user ids are UUIDs)."""
    return str(uuid.uuid4())


class Profile(Base):
    """Public profile of an authenticated member.

    The row is created at signup by the auth provider with the same id as the
    auth user, then edited through the settings forms.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_profile_id)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Free text chosen at signup: "Nonprofit", "Funder", "Community Member", ...
    role: Mapped[str | None] = mapped_column(Text, nullable=True)
    organization_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Platform-wide administrator; bypasses every organization permission check.
    is_omega_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    email_alerts_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    alert_keywords: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
