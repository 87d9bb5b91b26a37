# src/bulletin_board/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .announcement import AnnouncementCreate, AnnouncementResponse
from .community_settings import CommunitySettingsResponse, CommunitySettingsUpdate
from .email import EmailRequest
from .event import EventCreate, EventResponse
from .link import LinkCreate, LinkMove, LinkResponse
from .post import PendingCount, PostCreate, PostResponse, PostUpdate
from .user import (
    Credentials,
    LoginResponse,
    ProfileResponse,
    RegisterResponse,
    RoleUpdate,
    SessionResponse,
)

__all__ = [
    "AnnouncementCreate", "AnnouncementResponse",
    "CommunitySettingsResponse", "CommunitySettingsUpdate",
    "EmailRequest",
    "EventCreate", "EventResponse",
    "LinkCreate", "LinkMove", "LinkResponse",
    "PendingCount", "PostCreate", "PostResponse", "PostUpdate",
    "Credentials", "LoginResponse", "ProfileResponse", "RegisterResponse",
    "RoleUpdate", "SessionResponse",
]
