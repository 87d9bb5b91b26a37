"""Authentication endpoints for the bulletin board API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from bulletin_board.api.v1.dependencies import AuthenticatedDep, SessionDep
from bulletin_board.core.security import create_access_token, hash_password, verify_password
from bulletin_board.core.settings import settings
from bulletin_board.models import Profile, User
from bulletin_board.models.user import ROLE_ADMIN, ROLE_MEMBER
from bulletin_board.schemas.user import (
    Credentials,
    LoginResponse,
    RegisterResponse,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _normalise_email(email: str) -> str:
    return email.strip().lower()


def _ensure_profile(db: Session, user: User) -> Profile:
    """Create the user's profile on first sign-in."""
    profile = db.get(Profile, user.id)
    if profile is not None:
        return profile

    admin_email = settings.admin_email
    role = ROLE_ADMIN if admin_email and _normalise_email(admin_email) == user.email else ROLE_MEMBER
    profile = Profile(id=user.id, email=user.email, role=role)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    logger.info("Created profile for user %s with role %s", user.id, role)
    return profile


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(payload: Credentials, db: SessionDep) -> RegisterResponse:
    """Create a sign-in identity. The profile is created on first sign-in."""
    email = _normalise_email(payload.email)
    existing = db.query(User).filter(func.lower(User.email) == email).first()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )

    user = User(email=email, password_hash=hash_password(payload.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return RegisterResponse(user_id=user.id, email=user.email)


@router.post("/login", response_model=LoginResponse)
async def login(payload: Credentials, db: SessionDep) -> LoginResponse:
    """Verify credentials and return a bearer token."""
    email = _normalise_email(payload.email)
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if user is None or not verify_password(user.password_hash, payload.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    _ensure_profile(db, user)
    return LoginResponse(access_token=create_access_token(user.id), token_type="bearer")


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(_context: AuthenticatedDep) -> dict[str, str]:
    """Acknowledge sign-out; tokens are stateless and simply discarded by the client."""
    return {"status": "signed_out"}


@router.get("/session", response_model=SessionResponse)
async def get_session(context: AuthenticatedDep) -> SessionResponse:
    """Return the caller's identity and current role."""
    user = context.user
    return SessionResponse(
        user_id=user.id if user else "",
        email=user.email if user else "",
        role=context.role,
    )
