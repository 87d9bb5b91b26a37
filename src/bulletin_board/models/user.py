# src/bulletin_board/models/user.py
"""SQLAlchemy models for user identities and their profiles."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bulletin_board.db.session import Base
from bulletin_board.db.time import utcnow

ROLE_MEMBER = "member"
ROLE_BOARD_MEMBER = "board_member"
ROLE_ADMIN = "admin"

ROLES = (ROLE_MEMBER, ROLE_BOARD_MEMBER, ROLE_ADMIN)
# Board members and admins are treated identically for moderation.
MODERATOR_ROLES = frozenset({ROLE_BOARD_MEMBER, ROLE_ADMIN})


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Sign-in identity. Holds credentials only; the role lives on the profile."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_user_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    profile: Mapped[Profile | None] = relationship(
        "Profile",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )


class Profile(Base):
    """Per-user community profile, created on first sign-in."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=ROLE_MEMBER)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="profile")

    @property
    def is_moderator(self) -> bool:
        """Return True for board members and admins."""
        return self.role in MODERATOR_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
