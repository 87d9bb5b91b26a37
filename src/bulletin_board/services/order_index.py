"""Quick link ordering helpers.

Quick links carry a dense ``order_index`` (0..n-1). Every operation that
changes the set or order of quick links rewrites the indices of all of them
and commits once, so readers never observe duplicated or missing positions.
"""

from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy.orm import Session

from bulletin_board.models import Link

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]


class QuickLinkMoveError(ValueError):
    """Raised when a link cannot be moved in the requested direction."""


def ordered_quick_links(db: Session) -> list[Link]:
    """Return quick links in display order."""
    return (
        db.query(Link)
        .filter(Link.is_quick_link.is_(True))
        .order_by(Link.order_index.asc(), Link.id.asc())
        .all()
    )


def next_order_index(db: Session) -> int:
    """Return the index a newly appended quick link should receive."""
    return db.query(Link).filter(Link.is_quick_link.is_(True)).count()


def _renumber(links: list[Link]) -> None:
    for position, link in enumerate(links):
        if link.order_index != position:
            link.order_index = position


def normalize_order(db: Session, *, exclude_id: int | None = None) -> list[Link]:
    """Compact quick link indices to ``0..n-1`` keeping their relative order.

    Args:
        db: Database session; the caller commits.
        exclude_id: Link to leave out, e.g. one being deleted or demoted.

    Returns:
        The quick links in their new order.
    """
    links = [link for link in ordered_quick_links(db) if link.id != exclude_id]
    _renumber(links)
    return links


def move_quick_link(db: Session, link: Link, direction: Direction) -> list[Link]:
    """Swap a quick link with its neighbour in a single transaction.

    Args:
        db: Database session
        link: Quick link to move
        direction: "up" towards index 0 or "down" towards the end

    Returns:
        The quick links in their new order.

    Raises:
        QuickLinkMoveError: If the link is not a quick link or is already at
            the edge in the requested direction.
    """
    if not link.is_quick_link:
        raise QuickLinkMoveError("Only quick links can be reordered")

    links = ordered_quick_links(db)
    current = next(i for i, candidate in enumerate(links) if candidate.id == link.id)
    target = current - 1 if direction == "up" else current + 1
    if target < 0 or target >= len(links):
        raise QuickLinkMoveError(f"Quick link is already at the {'top' if direction == 'up' else 'bottom'}")

    links[current], links[target] = links[target], links[current]
    _renumber(links)
    db.commit()
    logger.info("Moved quick link %s %s to position %d", link.id, direction, target)
    return links
