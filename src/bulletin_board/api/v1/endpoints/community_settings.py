"""Community settings endpoints for the bulletin board API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from bulletin_board.api.v1.dependencies import AdminDep, SessionDep
from bulletin_board.models import CommunitySettings
from bulletin_board.schemas.community_settings import (
    CommunitySettingsResponse,
    CommunitySettingsUpdate,
)
from bulletin_board.services.community_settings import (
    SettingsSingletonError,
    get_community_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=CommunitySettingsResponse)
async def read_settings(db: SessionDep) -> CommunitySettings:
    """Return the community settings record."""
    try:
        return get_community_settings(db)
    except SettingsSingletonError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc


@router.put("/{settings_id}", response_model=CommunitySettingsResponse)
async def update_settings(
    settings_id: int,
    changes: CommunitySettingsUpdate,
    admin: AdminDep,
    db: SessionDep,
) -> CommunitySettings:
    """Update the settings record fetched earlier under `settings_id`."""
    row = db.get(CommunitySettings, settings_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Settings record not found",
        )

    updates = changes.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in updates.items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    logger.info(
        "Settings %s updated by %s: %s",
        row.id,
        admin.profile.id if admin.profile else None,
        sorted(updates),
    )
    return row
