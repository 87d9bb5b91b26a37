"""Access helpers for the singleton community settings record."""

from __future__ import annotations

import logging

from sqlalchemy.exc import MultipleResultsFound, NoResultFound
from sqlalchemy.orm import Session

from bulletin_board.core.settings import settings
from bulletin_board.models import CommunitySettings

logger = logging.getLogger(__name__)


class SettingsSingletonError(RuntimeError):
    """Raised when the settings table does not hold exactly one row."""


def get_community_settings(db: Session) -> CommunitySettings:
    """Return the single settings row.

    Raises:
        SettingsSingletonError: If zero or several rows exist.
    """
    try:
        return db.query(CommunitySettings).one()
    except NoResultFound as exc:
        logger.error("community_settings has no row")
        raise SettingsSingletonError("Community settings have not been initialised") from exc
    except MultipleResultsFound as exc:
        logger.error("community_settings has more than one row")
        raise SettingsSingletonError("Community settings are ambiguous: more than one row") from exc


def ensure_community_settings(db: Session) -> CommunitySettings:
    """Seed the settings row from configuration defaults if the table is empty."""
    existing = db.query(CommunitySettings).first()
    if existing is not None:
        return existing
    row = CommunitySettings(
        community_name=settings.default_community_name,
        subtitle=settings.default_community_subtitle,
        narrow_layout=False,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Seeded community settings row %s", row.id)
    return row
