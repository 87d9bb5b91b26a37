"""Moderation rules for community posts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from bulletin_board.models import Post
from bulletin_board.models.post import (
    POST_STATUS_APPROVED,
    POST_STATUS_PENDING,
    POST_STATUS_REJECTED,
)
from bulletin_board.models.user import MODERATOR_ROLES

logger = logging.getLogger(__name__)

# Allowed moves out of each status; approved and rejected are terminal.
_TRANSITIONS: dict[str, frozenset[str]] = {
    POST_STATUS_PENDING: frozenset({POST_STATUS_APPROVED, POST_STATUS_REJECTED}),
    POST_STATUS_APPROVED: frozenset(),
    POST_STATUS_REJECTED: frozenset(),
}


class InvalidTransitionError(RuntimeError):
    """Raised when a post cannot move to the requested status."""


class ModerationService:
    """Service handling post status assignment and transitions."""

    @staticmethod
    def initial_status(role: str | None) -> str:
        """Return the status a new post gets for an author with `role`.

        Moderators publish directly; everyone else goes through the queue.
        """
        if role in MODERATOR_ROLES:
            return POST_STATUS_APPROVED
        return POST_STATUS_PENDING

    @staticmethod
    def can_transition(current: str, target: str) -> bool:
        """Return True if `current` may move to `target`.

        Re-applying the status a post already has is accepted, so two
        moderators rejecting the same post both succeed. Opposite decisions
        racing each other are not last-write-wins: whichever commits second
        sees a terminal status and gets an InvalidTransitionError (409).
        """
        return current == target or target in _TRANSITIONS.get(current, frozenset())

    def transition(self, post: Post, target: str, db: Session) -> Post:
        """Move a post to `target` and commit.

        Args:
            post: Post to update
            target: "approved" or "rejected"
            db: Database session

        Returns:
            The refreshed post.

        Raises:
            InvalidTransitionError: If the post is already in a different
                terminal status.
        """
        if not self.can_transition(post.status, target):
            raise InvalidTransitionError(f"Post {post.id} is already {post.status}")

        previous = post.status
        post.status = target
        db.commit()
        db.refresh(post)
        logger.info("Post %s moved %s -> %s", post.id, previous, target)
        return post

    @staticmethod
    def pending_count(db: Session) -> int:
        """Return the number of posts awaiting moderation."""
        return db.query(Post).filter(Post.status == POST_STATUS_PENDING).count()
