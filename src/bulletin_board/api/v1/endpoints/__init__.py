# src/bulletin_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .announcements import router as announcements_router
from .auth import router as auth_router
from .community_settings import router as settings_router
from .email import router as email_router
from .events import router as events_router
from .links import router as links_router
from .moderation import router as moderation_router
from .posts import router as posts_router
from .system import router as system_router
from .users import router as users_router

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
