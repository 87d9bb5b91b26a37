# src/bulletin_board/models/community_settings.py
"""SQLAlchemy model for the community-wide settings record."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bulletin_board.db.session import Base
from bulletin_board.db.time import utcnow


class CommunitySettings(Base):
    """Singleton configuration row read by every page and written by admins."""

    __tablename__ = "community_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    community_name: Mapped[str] = mapped_column(String(200), nullable=False)
    subtitle: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    narrow_layout: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
