# src/bulletin_board/models/__init__.py
"""SQLAlchemy models for the bulletin board."""

from .announcement import Announcement
from .community_settings import CommunitySettings
from .event import Event
from .link import Link
from .post import Post
from .user import Profile, User

__all__ = [
    "Announcement",
    "CommunitySettings",
    "Event",
    "Link",
    "Post",
    "Profile",
    "User",
]
