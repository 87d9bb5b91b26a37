"""Admin user management endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from bulletin_board.api.v1.dependencies import AdminDep, SessionDep
from bulletin_board.models import Profile
from bulletin_board.schemas.user import ProfileResponse, RoleUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[ProfileResponse])
async def list_profiles(_admin: AdminDep, db: SessionDep) -> list[Profile]:
    """List every profile with its current role."""
    return db.query(Profile).order_by(Profile.created_at.asc(), Profile.email.asc()).all()


@router.put("/{user_id}/role", response_model=ProfileResponse)
async def update_role(
    user_id: str,
    payload: RoleUpdate,
    admin: AdminDep,
    db: SessionDep,
) -> Profile:
    """Change a user's role. Takes effect on that user's next request."""
    profile = db.get(Profile, user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    previous = profile.role
    profile.role = payload.role
    db.commit()
    db.refresh(profile)
    logger.info(
        "Role of %s changed %s -> %s by %s",
        profile.id,
        previous,
        profile.role,
        admin.profile.id if admin.profile else None,
    )
    return profile
