"""Shared API dependencies for sessions, role gates and the database."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bulletin_board.core.security import decode_access_token
from bulletin_board.db.session import get_db
from bulletin_board.models import Profile, User
from bulletin_board.models.user import MODERATOR_ROLES, ROLE_ADMIN

# Anonymous visitors are allowed through; gates below decide what they may do.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@dataclass(frozen=True)
class SessionContext:
    """Who is calling and with which role, resolved once per request.

    The role is read from the profile row on every request, so a role change
    made by an admin applies from the caller's next request onward.
    """

    user: User | None = None
    profile: Profile | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> str | None:
        """Return the caller's role, or None when there is no profile."""
        return self.profile.role if self.profile is not None else None

    @property
    def is_moderator(self) -> bool:
        return self.role in MODERATOR_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def resolve_role(db: Session, user_id: str) -> Profile | None:
    """Return the profile row for `user_id`, or None when absent."""
    return db.get(Profile, user_id)


def get_session_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> SessionContext:
    """Resolve the caller's session from an optional bearer token.

    Raises:
        HTTPException: If a token is supplied but invalid or its user is gone.
    """
    if credentials is None:
        return SessionContext()

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return SessionContext(user=user, profile=resolve_role(db, user_id))


SessionContextDep = Annotated[SessionContext, Depends(get_session_context)]


def require_user(context: SessionContextDep) -> SessionContext:
    """Require a signed-in caller."""
    if not context.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return context


AuthenticatedDep = Annotated[SessionContext, Depends(require_user)]


def require_member(context: AuthenticatedDep) -> SessionContext:
    """Require a signed-in caller with a profile (any role)."""
    if context.profile is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profile not found",
        )
    return context


def require_moderator(context: AuthenticatedDep) -> SessionContext:
    """Require a board member or admin."""
    if not context.is_moderator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator role required",
        )
    return context


def require_admin(context: AuthenticatedDep) -> SessionContext:
    """Require an admin."""
    if not context.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return context


MemberDep = Annotated[SessionContext, Depends(require_member)]
ModeratorDep = Annotated[SessionContext, Depends(require_moderator)]
AdminDep = Annotated[SessionContext, Depends(require_admin)]
