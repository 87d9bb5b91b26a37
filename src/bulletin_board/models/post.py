# src/bulletin_board/models/post.py
"""SQLAlchemy model for community posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bulletin_board.db.session import Base
from bulletin_board.db.time import utcnow
from bulletin_board.models.user import Profile

POST_STATUS_PENDING = "pending"
POST_STATUS_APPROVED = "approved"
POST_STATUS_REJECTED = "rejected"

POST_STATUSES = (POST_STATUS_PENDING, POST_STATUS_APPROVED, POST_STATUS_REJECTED)

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 2000


class Post(Base):
    """Member-submitted post that passes through the moderation queue."""

    __tablename__ = "community_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    # pending -> approved | rejected; both targets are terminal.
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=POST_STATUS_PENDING, index=True
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
