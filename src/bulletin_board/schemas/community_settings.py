"""Community settings Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommunitySettingsUpdate(BaseModel):
    """Partial update of the settings record; omitted fields are left alone."""

    community_name: str | None = Field(None, min_length=1, max_length=200)
    subtitle: str | None = Field(None, max_length=300)
    narrow_layout: bool | None = None


class CommunitySettingsResponse(BaseModel):
    id: int
    community_name: str
    subtitle: str
    narrow_layout: bool
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
