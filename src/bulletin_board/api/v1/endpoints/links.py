"""Helpful link and quick link endpoints for the bulletin board API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.orm import Session

from bulletin_board.api.v1.dependencies import ModeratorDep, SessionDep
from bulletin_board.models import Link
from bulletin_board.schemas.link import LinkCreate, LinkMove, LinkResponse
from bulletin_board.services.order_index import (
    QuickLinkMoveError,
    move_quick_link,
    next_order_index,
    normalize_order,
    ordered_quick_links,
)

router = APIRouter(prefix="/links", tags=["links"])


def _get_link_or_404(db: Session, link_id: int) -> Link:
    link = db.get(Link, link_id)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    return link


@router.get("/", response_model=list[LinkResponse])
async def list_links(db: SessionDep) -> list[Link]:
    """List general resource links, newest first."""
    return (
        db.query(Link)
        .filter(Link.is_quick_link.is_(False))
        .order_by(Link.created_at.desc(), Link.id.desc())
        .all()
    )


@router.get("/quick", response_model=list[LinkResponse])
async def list_quick_links(db: SessionDep) -> list[Link]:
    """List sidebar quick links in display order."""
    return ordered_quick_links(db)


@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(payload: LinkCreate, context: ModeratorDep, db: SessionDep) -> Link:
    """Add a link; quick links are appended to the end of the sidebar."""
    link = Link(
        title=payload.title,
        url=payload.url,
        description=payload.description,
        is_quick_link=payload.is_quick_link,
        order_index=next_order_index(db) if payload.is_quick_link else None,
        author_id=context.profile.id if context.profile else None,
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    return link


@router.put("/{link_id}", response_model=LinkResponse)
async def update_link(
    link_id: int,
    payload: LinkCreate,
    _moderator: ModeratorDep,
    db: SessionDep,
) -> Link:
    """Replace a link's details, moving it in or out of the quick links."""
    link = _get_link_or_404(db, link_id)
    was_quick = link.is_quick_link

    if was_quick and not payload.is_quick_link:
        normalize_order(db, exclude_id=link.id)
        link.order_index = None
    elif payload.is_quick_link and not was_quick:
        link.order_index = next_order_index(db)

    link.title = payload.title
    link.url = payload.url
    link.description = payload.description
    link.is_quick_link = payload.is_quick_link
    db.commit()
    db.refresh(link)
    return link


@router.post("/{link_id}/move", response_model=list[LinkResponse])
async def move_link(
    link_id: int,
    payload: LinkMove,
    _moderator: ModeratorDep,
    db: SessionDep,
) -> list[Link]:
    """Swap a quick link with its neighbour and return the new order."""
    link = _get_link_or_404(db, link_id)
    try:
        return move_quick_link(db, link, payload.direction)
    except QuickLinkMoveError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.delete(
    "/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_link(link_id: int, _moderator: ModeratorDep, db: SessionDep) -> Response:
    """Delete a link, closing the gap it leaves among the quick links."""
    link = _get_link_or_404(db, link_id)
    if link.is_quick_link:
        normalize_order(db, exclude_id=link.id)
    db.delete(link)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
