"""Event Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bulletin_board.db.time import as_utc


class EventCreate(BaseModel):
    """Schema for creating or replacing an event."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    location: str | None = Field(None, max_length=200)
    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalise_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _check_chronology(self) -> "EventCreate":
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class EventResponse(BaseModel):
    id: int
    title: str
    description: str | None
    location: str | None
    start_time: datetime
    end_time: datetime
    author_id: str | None
    author_email: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
