# tests/v1/test_auth.py
"""Tests for registration, sign-in and session resolution."""

from fastapi import status

from bulletin_board.core.settings import settings
from bulletin_board.models import Profile, User

PASSWORD = "a-long-enough-secret"


def _register(client, email: str = "neighbour@example.org", password: str = PASSWORD):
    return client.post("/api/v1/auth/register", json={"email": email, "password": password})


def _login(client, email: str = "neighbour@example.org", password: str = PASSWORD):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def test_register_creates_user_without_profile(client, db_session) -> None:
    response = _register(client)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["email"] == "neighbour@example.org"
    user = db_session.get(User, data["user_id"])
    assert user is not None
    assert user.password_hash != PASSWORD
    assert db_session.get(Profile, data["user_id"]) is None


def test_register_normalises_email_and_rejects_duplicates(client) -> None:
    assert _register(client, email="Neighbour@Example.org").status_code == status.HTTP_201_CREATED

    response = _register(client, email="neighbour@example.org")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Email is already registered"


def test_register_validates_payload(client) -> None:
    assert _register(client, email="not-an-email").status_code == 422
    assert _register(client, password="short").status_code == 422


def test_login_creates_member_profile_on_first_sign_in(client, db_session) -> None:
    user_id = _register(client).json()["user_id"]

    response = _login(client)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["token_type"] == "bearer"
    profile = db_session.get(Profile, user_id)
    assert profile is not None
    assert profile.role == "member"


def test_login_grants_admin_to_configured_email(client, db_session, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_email", "Chair@Example.org")
    user_id = _register(client, email="chair@example.org").json()["user_id"]

    assert _login(client, email="chair@example.org").status_code == status.HTTP_200_OK
    assert db_session.get(Profile, user_id).role == "admin"


def test_login_rejects_bad_credentials(client) -> None:
    _register(client)

    wrong_password = _login(client, password="not-the-password")
    unknown_email = _login(client, email="stranger@example.org")

    assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
    assert unknown_email.status_code == status.HTTP_401_UNAUTHORIZED
    assert wrong_password.json()["detail"] == unknown_email.json()["detail"]


def test_session_reports_identity_and_role(client) -> None:
    _register(client)
    token = _login(client).json()["access_token"]

    response = client.get("/api/v1/auth/session", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["email"] == "neighbour@example.org"
    assert data["role"] == "member"


def test_session_role_is_null_without_profile(client, make_user, auth_headers) -> None:
    user = make_user("ghost@example.org", role=None)

    response = client.get("/api/v1/auth/session", headers=auth_headers(user))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] is None


def test_session_requires_authentication(client) -> None:
    assert client.get("/api/v1/auth/session").status_code == status.HTTP_401_UNAUTHORIZED


def test_logout_acknowledges(client, member_headers) -> None:
    response = client.post("/api/v1/auth/logout", headers=member_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "signed_out"}
