# src/bulletin_board/services/__init__.py
"""Business logic services for the bulletin board."""

from .mailer import EmailService
from .moderation import ModerationService

__all__ = [
    "EmailService",
    "ModerationService",
]
