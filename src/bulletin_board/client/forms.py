"""Form validation performed before any request leaves the client."""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from bulletin_board.client.errors import BoardValidationError

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 2000


class PostForm(BaseModel):
    """Title and content of a post as typed by the user."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)


def validate_post_form(title: str, content: str) -> PostForm:
    """Validate a post form, leaving the caller's input untouched.

    Raises:
        BoardValidationError: With one message per offending field.
    """
    try:
        return PostForm(title=title, content=content)
    except ValidationError as exc:
        errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        raise BoardValidationError(errors) from exc
