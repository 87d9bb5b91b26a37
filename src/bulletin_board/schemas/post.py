"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from bulletin_board.models.post import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH


class PostCreate(BaseModel):
    """Schema for submitting a new post."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)


class PostUpdate(BaseModel):
    """Schema for a moderator edit; status is never part of an edit."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content: str
    author_id: str | None
    author_email: str | None = None
    status: Literal["pending", "approved", "rejected"]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PendingCount(BaseModel):
    """Number of posts awaiting moderation."""

    count: int
