"""Email dispatch Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class EmailRequest(BaseModel):
    """Payload accepted by the send-email endpoint.

    Fields are optional at the schema level so that missing values are
    reported through the endpoint's ``{"error": ...}`` contract instead of a
    validation response.
    """

    to: str | None = None
    subject: str | None = None
    html: str | None = None
    sender: str | None = Field(None, alias="from")

    model_config = ConfigDict(populate_by_name=True)
