# src/bulletin_board/models/announcement.py
"""SQLAlchemy model for board announcements."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bulletin_board.db.session import Base
from bulletin_board.db.time import utcnow
from bulletin_board.models.user import Profile


class Announcement(Base):
    """Announcement published by a moderator; visible to everyone once created."""

    __tablename__ = "announcements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[Profile | None] = relationship("Profile", lazy="joined")

    @property
    def author_email(self) -> str | None:
        return self.author.email if self.author else None
