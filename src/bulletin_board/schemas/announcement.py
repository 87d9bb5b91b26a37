"""Announcement Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    """Schema for creating or replacing an announcement."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class AnnouncementResponse(BaseModel):
    id: int
    title: str
    content: str
    author_id: str | None
    author_email: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
