"""Moderation queue endpoints for the bulletin board API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from bulletin_board.api.v1.dependencies import ModeratorDep, SessionDep
from bulletin_board.models import Post
from bulletin_board.models.post import (
    POST_STATUS_APPROVED,
    POST_STATUS_PENDING,
    POST_STATUS_REJECTED,
)
from bulletin_board.schemas.post import PostResponse, PostUpdate
from bulletin_board.services.moderation import InvalidTransitionError, ModerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moderation", tags=["moderation"])
moderation_service = ModerationService()


def _get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


def _transition(db: Session, post_id: int, target: str) -> Post:
    post = _get_post_or_404(db, post_id)
    try:
        return moderation_service.transition(post, target, db)
    except InvalidTransitionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc


@router.get("/queue", response_model=list[PostResponse])
async def get_moderation_queue(_moderator: ModeratorDep, db: SessionDep) -> list[Post]:
    """List pending posts in submission order."""
    return (
        db.query(Post)
        .filter(Post.status == POST_STATUS_PENDING)
        .order_by(Post.created_at.asc(), Post.id.asc())
        .all()
    )


@router.post("/posts/{post_id}/approve", response_model=PostResponse)
async def approve_post(post_id: int, _moderator: ModeratorDep, db: SessionDep) -> Post:
    """Publish a pending post."""
    return _transition(db, post_id, POST_STATUS_APPROVED)


@router.post("/posts/{post_id}/reject", response_model=PostResponse)
async def reject_post(post_id: int, _moderator: ModeratorDep, db: SessionDep) -> Post:
    """Reject a pending post."""
    return _transition(db, post_id, POST_STATUS_REJECTED)


@router.patch("/posts/{post_id}", response_model=PostResponse)
async def edit_post(
    post_id: int,
    changes: PostUpdate,
    moderator: ModeratorDep,
    db: SessionDep,
) -> Post:
    """Edit a post's title and content; its status is left unchanged."""
    post = _get_post_or_404(db, post_id)
    post.title = changes.title
    post.content = changes.content
    db.commit()
    db.refresh(post)
    logger.info("Post %s edited by %s", post.id, moderator.profile.id if moderator.profile else None)
    return post
