"""Explicit client session object."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

SESSION_PATH = "/api/v1/auth/session"
MODERATOR_ROLES = frozenset({"board_member", "admin"})


@dataclass
class ClientSession:
    """Who is signed in and with which role, as last seen by the client.

    The session is refreshed explicitly: after sign-in, after sign-out and
    when the caller asks for a reload. A role changed by an admin is picked
    up by the next refresh.
    """

    access_token: str | None = None
    user_id: str | None = None
    email: str | None = None
    role: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None and self.user_id is not None

    @property
    def is_moderator(self) -> bool:
        return self.role in MODERATOR_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def auth_headers(self) -> dict[str, str]:
        if self.access_token is None:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    def clear(self) -> None:
        """Forget the token and identity."""
        self.access_token = None
        self.user_id = None
        self.email = None
        self.role = None

    def apply(self, payload: dict[str, Any]) -> None:
        self.user_id = payload.get("user_id")
        self.email = payload.get("email")
        self.role = payload.get("role")

    async def refresh(self, http: httpx.AsyncClient) -> ClientSession:
        """Re-read identity and role from the server.

        A rejected token clears the session instead of raising.
        """
        if self.access_token is None:
            self.clear()
            return self

        response = await http.get(SESSION_PATH, headers=self.auth_headers())
        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info("Session token rejected; signing out locally")
            self.clear()
            return self
        response.raise_for_status()
        self.apply(response.json())
        return self
