"""User, profile and authentication Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Shape check only.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

RoleName = Literal["member", "board_member", "admin"]


class Credentials(BaseModel):
    """Email and password pair used to register and sign in."""

    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)


class RegisterResponse(BaseModel):
    """Registration response containing the new opaque user id."""

    user_id: str
    email: str


class LoginResponse(BaseModel):
    """Response returned after successful sign-in."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")


class SessionResponse(BaseModel):
    """Identity and resolved role of the caller.

    ``role`` is null when the user has no profile yet.
    """

    user_id: str
    email: str
    role: RoleName | None = None


class ProfileResponse(BaseModel):
    """Profile row as shown on the admin user management page."""

    id: str
    email: str
    role: RoleName
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    """Request body for changing a user's role."""

    role: RoleName
