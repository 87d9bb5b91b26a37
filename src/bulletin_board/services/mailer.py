"""Outbound email dispatch.

The provider is chosen from configuration: the Resend HTTP API when an API
key is set, otherwise an SMTP credential set. The SMTP branch does not
deliver mail yet; it logs the message and returns a placeholder receipt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from bulletin_board.core.settings import Settings, settings

logger = logging.getLogger(__name__)

SMTP_PLACEHOLDER_ID = "smtp-placeholder"


class EmailError(RuntimeError):
    """Base exception raised when an email cannot be dispatched."""


class EmailConfigurationError(EmailError):
    """Raised when neither Resend nor SMTP is configured."""


@dataclass(frozen=True)
class OutgoingEmail:
    """A single message addressed to one recipient."""

    to: str
    subject: str
    html: str
    sender: str | None = None


class EmailService:
    """Send email through whichever provider the configuration selects."""

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or settings
        self._transport = transport

    @property
    def provider(self) -> str | None:
        """Return "resend", "smtp", or None when nothing is configured."""
        if self.config.resend_configured:
            return "resend"
        if self.config.smtp_configured:
            return "smtp"
        return None

    def _resolve_sender(self, message: OutgoingEmail) -> str:
        return message.sender or self.config.email_default_from

    async def send(self, message: OutgoingEmail) -> dict[str, Any]:
        """Dispatch `message` and return the provider receipt.

        Raises:
            EmailError: If required fields are missing or the provider fails.
            EmailConfigurationError: If no provider is configured.
        """
        if not (message.to and message.subject and message.html):
            raise EmailError("Missing required fields: to, subject, or html")

        provider = self.provider
        if provider == "resend":
            receipt = await self._send_resend(message)
        elif provider == "smtp":
            receipt = self._send_smtp(message)
        else:
            raise EmailConfigurationError(
                "No email configuration available. Please set either RESEND_API_KEY "
                "or SMTP_* environment variables"
            )

        logger.info("Email sent via %s to %s: %s", provider, message.to, receipt.get("id"))
        return receipt

    async def _send_resend(self, message: OutgoingEmail) -> dict[str, Any]:
        payload = {
            "from": self._resolve_sender(message),
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        headers = {"Authorization": f"Bearer {self.config.resend_api_key}"}
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.email_http_timeout_seconds),
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self.config.resend_api_url, json=payload, headers=headers)
            except httpx.HTTPError as exc:
                raise EmailError(f"Email provider request failed: {exc}") from exc

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            detail = (body.get("message") or body.get("error")) if isinstance(body, dict) else None
            detail = detail or response.text
            raise EmailError(f"Email provider responded with {response.status_code}: {detail}")

        try:
            data = response.json()
        except ValueError as exc:
            raise EmailError(f"Email provider returned an unreadable receipt: {exc}") from exc
        if not isinstance(data, dict):
            raise EmailError("Email provider returned an unexpected receipt")
        return data

    def _send_smtp(self, message: OutgoingEmail) -> dict[str, Any]:
        sender = message.sender or self.config.smtp_from or self.config.email_default_from
        logger.info(
            "Would send email via SMTP %s:%s from %s to %s with subject %r",
            self.config.smtp_host,
            self.config.smtp_port,
            sender,
            message.to,
            message.subject,
        )
        return {"id": SMTP_PLACEHOLDER_ID, "success": True}


def get_email_service() -> EmailService:
    """Return an email service bound to the runtime settings."""
    return EmailService()
