"""Post-related endpoints for the bulletin board API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy import or_
from sqlalchemy.orm import Query as OrmQuery

from bulletin_board.api.v1.dependencies import (
    MemberDep,
    ModeratorDep,
    SessionContextDep,
    SessionDep,
)
from bulletin_board.models import Post
from bulletin_board.models.post import POST_STATUS_APPROVED
from bulletin_board.schemas.post import PendingCount, PostCreate, PostResponse
from bulletin_board.services.moderation import ModerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])
moderation_service = ModerationService()


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_search(query: OrmQuery[Post], term: str | None) -> OrmQuery[Post]:
    """Filter by a case-insensitive substring of title OR content.

    LIKE wildcards in `term` match literally. Case folding follows the
    database: SQLite folds ASCII only, PostgreSQL ILIKE folds Unicode.
    """
    if not term:
        return query
    pattern = f"%{_escape_like(term)}%"
    return query.filter(
        or_(
            Post.title.ilike(pattern, escape="\\"),
            Post.content.ilike(pattern, escape="\\"),
        )
    )


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    q: str | None = Query(None, description="Search title and content"),
) -> list[Post]:
    """List approved posts, newest first, optionally filtered by a search term."""
    query = db.query(Post).filter(Post.status == POST_STATUS_APPROVED)
    query = apply_search(query, q)
    return query.order_by(Post.created_at.desc(), Post.id.desc()).all()


@router.get("/pending-count", response_model=PendingCount)
async def get_pending_count(_moderator: ModeratorDep, db: SessionDep) -> PendingCount:
    """Return the number of posts awaiting moderation."""
    return PendingCount(count=moderation_service.pending_count(db))


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, context: SessionContextDep, db: SessionDep) -> Post:
    """Get a single post.

    Posts that are not approved are only visible to moderators; for everyone
    else they are indistinguishable from missing posts.
    """
    post = db.get(Post, post_id)
    if post is None or (post.status != POST_STATUS_APPROVED and not context.is_moderator):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(post_data: PostCreate, context: MemberDep, db: SessionDep) -> Post:
    """Submit a post; moderators publish directly, members go through review."""
    new_post = Post(
        title=post_data.title,
        content=post_data.content,
        author_id=context.profile.id,
        status=moderation_service.initial_status(context.role),
    )
    db.add(new_post)
    db.commit()
    db.refresh(new_post)
    logger.info("Post %s submitted by %s with status %s", new_post.id, context.profile.id, new_post.status)
    return new_post


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_post(post_id: int, _moderator: ModeratorDep, db: SessionDep) -> Response:
    """Permanently delete a post."""
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    db.delete(post)
    db.commit()
    logger.info("Post %s deleted", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
