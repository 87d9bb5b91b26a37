# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from bulletin_board.core.security import create_access_token, hash_password
from bulletin_board.db.session import Base
from bulletin_board.db.session import get_db as app_get_session
from bulletin_board.main import app as fastapi_app
from bulletin_board.models import CommunitySettings, Post, Profile, User
from bulletin_board.models.post import POST_STATUS_PENDING
from bulletin_board.models.user import ROLE_ADMIN, ROLE_BOARD_MEMBER, ROLE_MEMBER

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash the shared test password once; Argon2id is deliberately slow."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture()
def make_user(db_session: Session, password_hash: str) -> Callable[..., User]:
    """Return a factory that persists a user and, unless `role` is None, a profile."""

    def _make(email: str, role: str | None = ROLE_MEMBER) -> User:
        user = User(email=email, password_hash=password_hash)
        db_session.add(user)
        db_session.flush()
        if role is not None:
            db_session.add(Profile(id=user.id, email=email, role=role))
            db_session.flush()
        db_session.refresh(user)
        return user

    return _make


def headers_for(user: User) -> dict[str, str]:
    """Return bearer authorization headers for `user`."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    return headers_for


@pytest.fixture()
def member(make_user: Callable[..., User]) -> User:
    return make_user("resident@example.org", ROLE_MEMBER)


@pytest.fixture()
def board_member(make_user: Callable[..., User]) -> User:
    return make_user("board@example.org", ROLE_BOARD_MEMBER)


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user("chair@example.org", ROLE_ADMIN)


@pytest.fixture()
def member_headers(member: User) -> dict[str, str]:
    return headers_for(member)


@pytest.fixture()
def moderator_headers(board_member: User) -> dict[str, str]:
    return headers_for(board_member)


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return headers_for(admin)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that persists a post directly, bypassing the API."""

    def _make(
        author: User | None,
        title: str = "Lost cat",
        content: str = "Grey tabby, answers to Miso.",
        status: str = POST_STATUS_PENDING,
        created_at: datetime | None = None,
    ) -> Post:
        post = Post(
            title=title,
            content=content,
            author_id=author.id if author else None,
            status=status,
        )
        if created_at is not None:
            post.created_at = created_at
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def community_settings(db_session: Session) -> CommunitySettings:
    """Seed the singleton settings row."""
    row = CommunitySettings(
        community_name="Community Bulletin Board",
        subtitle="Your Source for Local Updates and Announcements",
        narrow_layout=False,
    )
    db_session.add(row)
    db_session.flush()
    db_session.refresh(row)
    return row


@pytest.fixture()
def test_password() -> str:
    """Plain-text password of every user built by `make_user`."""
    return TEST_PASSWORD
