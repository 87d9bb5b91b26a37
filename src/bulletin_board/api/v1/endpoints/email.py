"""Email dispatch endpoint."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from bulletin_board.api.v1.dependencies import AuthenticatedDep
from bulletin_board.schemas.email import EmailRequest
from bulletin_board.services.mailer import (
    EmailError,
    EmailService,
    OutgoingEmail,
    get_email_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/email", tags=["email"])


def get_email_service_dep() -> EmailService:
    """Return the configured email service."""
    return get_email_service()


EmailServiceDep = Annotated[EmailService, Depends(get_email_service_dep)]


@router.post("/send")
async def send_email(
    request: Request,
    _context: AuthenticatedDep,
    email_service: EmailServiceDep,
) -> Any:
    """Send one HTML email.

    Responds 200 with the provider receipt, or 500 with ``{"error": ...}``
    for any failure, including a body that is not a JSON object of strings.
    """
    try:
        payload = EmailRequest.model_validate(await request.json())
        message = OutgoingEmail(
            to=payload.to or "",
            subject=payload.subject or "",
            html=payload.html or "",
            sender=payload.sender,
        )
        return await email_service.send(message)
    except ValidationError as exc:
        return _error_response(f"Invalid request body: {exc.error_count()} invalid field(s)")
    except ValueError as exc:
        return _error_response(f"Request body is not valid JSON: {exc}")
    except EmailError as exc:
        return _error_response(str(exc))


def _error_response(message: str) -> JSONResponse:
    logger.error("Error in send-email endpoint: %s", message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message or "Unknown error occurred"},
    )
