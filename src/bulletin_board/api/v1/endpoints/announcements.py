"""Announcement endpoints for the bulletin board API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from bulletin_board.api.v1.dependencies import ModeratorDep, SessionContext, SessionDep
from bulletin_board.models import Announcement
from bulletin_board.schemas.announcement import AnnouncementCreate, AnnouncementResponse

router = APIRouter(prefix="/announcements", tags=["announcements"])


def _get_owned_announcement(db, announcement_id: int, context: SessionContext) -> Announcement:
    """Return an announcement the caller authored, or raise 404/403."""
    announcement = db.get(Announcement, announcement_id)
    if announcement is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found",
        )
    if context.profile is None or announcement.author_id != context.profile.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author can change this announcement",
        )
    return announcement


@router.get("/", response_model=list[AnnouncementResponse])
async def list_announcements(db: SessionDep) -> list[Announcement]:
    """List announcements, newest first."""
    return (
        db.query(Announcement)
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        .all()
    )


@router.post("/", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    payload: AnnouncementCreate,
    context: ModeratorDep,
    db: SessionDep,
) -> Announcement:
    """Publish an announcement."""
    announcement = Announcement(
        title=payload.title,
        content=payload.content,
        author_id=context.profile.id if context.profile else None,
    )
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    return announcement


@router.put("/{announcement_id}", response_model=AnnouncementResponse)
async def update_announcement(
    announcement_id: int,
    payload: AnnouncementCreate,
    context: ModeratorDep,
    db: SessionDep,
) -> Announcement:
    """Replace the title and content of one of the caller's announcements."""
    announcement = _get_owned_announcement(db, announcement_id, context)
    announcement.title = payload.title
    announcement.content = payload.content
    db.commit()
    db.refresh(announcement)
    return announcement


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_announcement(
    announcement_id: int,
    context: ModeratorDep,
    db: SessionDep,
) -> Response:
    """Delete one of the caller's announcements."""
    announcement = _get_owned_announcement(db, announcement_id, context)
    db.delete(announcement)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
