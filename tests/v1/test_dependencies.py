# tests/v1/test_dependencies.py
"""Tests for session resolution and role gate dependencies."""

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from bulletin_board.api.v1.dependencies import (
    SessionContext,
    get_session_context,
    require_admin,
    require_member,
    require_moderator,
    require_user,
)
from bulletin_board.core.security import create_access_token


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetSessionContext:
    def test_anonymous_without_token(self, db_session):
        context = get_session_context(None, db_session)

        assert not context.is_authenticated
        assert context.role is None
        assert not context.is_moderator

    def test_invalid_token_is_rejected(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            get_session_context(_credentials("not-a-jwt"), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_for_deleted_user_is_rejected(self, db_session):
        token = create_access_token("00000000-0000-0000-0000-000000000000")

        with pytest.raises(HTTPException) as exc_info:
            get_session_context(_credentials(token), db_session)

        assert exc_info.value.detail == "User not found"

    def test_role_is_read_on_every_request(self, db_session, member):
        token = create_access_token(member.id)
        assert get_session_context(_credentials(token), db_session).role == "member"

        member.profile.role = "board_member"
        db_session.commit()

        context = get_session_context(_credentials(token), db_session)
        assert context.role == "board_member"
        assert context.is_moderator
        assert not context.is_admin


class TestRoleGates:
    def test_require_user_rejects_anonymous(self):
        with pytest.raises(HTTPException) as exc_info:
            require_user(SessionContext())
        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_require_member_rejects_missing_profile(self, make_user):
        user = make_user("ghost@example.org", role=None)

        with pytest.raises(HTTPException) as exc_info:
            require_member(SessionContext(user=user, profile=None))
        assert exc_info.value.status_code == status.HTTP_403_FORBIDDEN

    def test_require_moderator(self, member, board_member, admin):
        with pytest.raises(HTTPException):
            require_moderator(SessionContext(user=member, profile=member.profile))

        for user in (board_member, admin):
            context = SessionContext(user=user, profile=user.profile)
            assert require_moderator(context) is context

    def test_require_admin(self, board_member, admin):
        with pytest.raises(HTTPException) as exc_info:
            require_admin(SessionContext(user=board_member, profile=board_member.profile))
        assert exc_info.value.status_code == status.HTTP_403_FORBIDDEN

        context = SessionContext(user=admin, profile=admin.profile)
        assert require_admin(context) is context
