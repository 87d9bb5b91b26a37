"""Exceptions raised by the bulletin board client."""

from __future__ import annotations

from typing import Any


class BoardClientError(RuntimeError):
    """Raised when a request to the board API fails.

    ``status_code`` is None when the request never got a response.
    """

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class BoardValidationError(ValueError):
    """Raised for invalid form input before anything is sent."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors: dict[str, Any] = errors
