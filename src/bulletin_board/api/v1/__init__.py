# src/bulletin_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    announcements_router,
    auth_router,
    email_router,
    events_router,
    links_router,
    moderation_router,
    posts_router,
    settings_router,
    system_router,
    users_router,
)

__all__ = [
    "announcements_router",
    "auth_router",
    "email_router",
    "events_router",
    "links_router",
    "moderation_router",
    "posts_router",
    "settings_router",
    "system_router",
    "users_router",
]
