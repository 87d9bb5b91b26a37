"""Event endpoints for the bulletin board API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status

from bulletin_board.api.v1.dependencies import ModeratorDep, SessionDep
from bulletin_board.core.settings import settings
from bulletin_board.db.time import utcnow
from bulletin_board.models import Event
from bulletin_board.schemas.event import EventCreate, EventResponse

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=list[EventResponse])
async def list_events(db: SessionDep) -> list[Event]:
    """List all events by start time."""
    return db.query(Event).order_by(Event.start_time.asc(), Event.id.asc()).all()


@router.get("/upcoming", response_model=list[EventResponse])
async def list_upcoming_events(
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> list[Event]:
    """Events that have not ended yet, soonest first."""
    return (
        db.query(Event)
        .filter(Event.end_time >= utcnow())
        .order_by(Event.start_time.asc(), Event.id.asc())
        .limit(limit or settings.upcoming_events_limit)
        .all()
    )


@router.get("/past", response_model=list[EventResponse])
async def list_past_events(
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> list[Event]:
    """Events that have ended, most recently ended first."""
    return (
        db.query(Event)
        .filter(Event.end_time < utcnow())
        .order_by(Event.end_time.desc(), Event.id.desc())
        .limit(limit or settings.past_events_limit)
        .all()
    )


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(payload: EventCreate, context: ModeratorDep, db: SessionDep) -> Event:
    """Schedule an event."""
    event = Event(
        **payload.model_dump(),
        author_id=context.profile.id if context.profile else None,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    payload: EventCreate,
    _moderator: ModeratorDep,
    db: SessionDep,
) -> Event:
    """Replace an event's details."""
    event = db.get(Event, event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    for field, value in payload.model_dump().items():
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    return event


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_event(event_id: int, _moderator: ModeratorDep, db: SessionDep) -> Response:
    """Delete an event."""
    event = db.get(Event, event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    db.delete(event)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
