"""System endpoints for the bulletin board API."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bulletin_board.api.v1.dependencies import SessionDep
from bulletin_board.core.settings import settings
from bulletin_board.services.mailer import get_email_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def get_system_health(db: SessionDep) -> dict[str, object]:
    """Report database connectivity and the configured email provider."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Database health probe failed: %s", e)
        db_status = f"unhealthy: {e}"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "timestamp": int(time.time()),
        "components": {
            "database": db_status,
            "email": get_email_service().provider or "unconfigured",
        },
        "version": settings.app_version,
    }
