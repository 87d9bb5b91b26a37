"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_COMMUNITY_NAME = "Community Bulletin Board"
DEFAULT_COMMUNITY_SUBTITLE = "Your Source for Local Updates and Announcements"


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False))
    return columns


def _author() -> sa.Column:
    return sa.Column(
        "author_id",
        sa.String(length=36),
        sa.ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )


def upgrade() -> None:
    """Create the board tables and seed the settings row."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="member"),
        *_timestamps(),
    )
    op.create_table(
        "community_posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _author(),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        *_timestamps(),
    )
    op.create_index("ix_community_posts_status", "community_posts", ["status"])
    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _author(),
        *_timestamps(),
    )
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        _author(),
        *_timestamps(),
    )
    op.create_index("ix_events_start_time", "events", ["start_time"])
    op.create_index("ix_events_end_time", "events", ["end_time"])
    op.create_table(
        "links",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_quick_link", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order_index", sa.Integer(), nullable=True),
        _author(),
        *_timestamps(updated=False),
    )
    community_settings = op.create_table(
        "community_settings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("community_name", sa.String(length=200), nullable=False),
        sa.Column("subtitle", sa.String(length=300), nullable=False, server_default=""),
        sa.Column("narrow_layout", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    now = datetime.now(timezone.utc)
    op.bulk_insert(
        community_settings,
        [
            {
                "community_name": DEFAULT_COMMUNITY_NAME,
                "subtitle": DEFAULT_COMMUNITY_SUBTITLE,
                "narrow_layout": False,
                "created_at": now,
                "updated_at": now,
            }
        ],
    )


def downgrade() -> None:
    """Drop every board table."""
    op.drop_table("community_settings")
    op.drop_table("links")
    op.drop_index("ix_events_end_time", table_name="events")
    op.drop_index("ix_events_start_time", table_name="events")
    op.drop_table("events")
    op.drop_table("announcements")
    op.drop_index("ix_community_posts_status", table_name="community_posts")
    op.drop_table("community_posts")
    op.drop_table("profiles")
    op.drop_table("users")
