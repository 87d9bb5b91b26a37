"""Link Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LinkCreate(BaseModel):
    """Schema for creating or replacing a link."""

    title: str = Field(..., min_length=1, max_length=200)
    url: str = Field(..., min_length=1, max_length=2048, pattern=r"^https?://\S+$")
    description: str | None = None
    is_quick_link: bool = False


class LinkMove(BaseModel):
    """Direction in which to move a quick link within the sidebar."""

    direction: Literal["up", "down"]


class LinkResponse(BaseModel):
    id: int
    title: str
    url: str
    description: str | None
    is_quick_link: bool
    order_index: int | None
    author_id: str | None
    author_email: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
