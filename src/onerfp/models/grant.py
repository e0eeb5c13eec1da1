"""Grant opportunities, as read by the alert batch job."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from onerfp.db.session import Base
from onerfp.db.time import utcnow


class Grant(Base):
    """Funding opportunity listed on the site."""

    __tablename__ = "grants"
    __table_args__ = (Index("ix_grants_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    grant_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
