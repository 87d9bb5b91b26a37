# src/bulletin_board/models/link.py
"""SQLAlchemy model for helpful links and sidebar quick links."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bulletin_board.db.session import Base
from bulletin_board.db.time import utcnow
from bulletin_board.models.user import Profile


class Link(Base):
    """External resource link.

    Quick links render in the sidebar ordered by ``order_index``; the index is
    NULL for general resource links.
    """

    __tablename__ = "links"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_quick_link: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Dense 0..n-1 among quick links.
    order_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    author_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author: Mapped[Profile | None] = relationship("Profile", lazy="joined")

    @property
    def author_email(self) -> str | None:
        return self.author.email if self.author else None
