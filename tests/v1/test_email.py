# tests/v1/test_email.py
"""Tests for the email dispatch endpoint."""

import httpx
import pytest
from fastapi import status

from bulletin_board.api.v1.endpoints.email import get_email_service_dep
from bulletin_board.core.settings import Settings
from bulletin_board.services.mailer import EmailService

MESSAGE = {"to": "resident@example.org", "subject": "Approved", "html": "<p>Your post is live</p>"}


def _settings(**overrides) -> Settings:
    values = {"SECRET_KEY": "test", "RESEND_API_KEY": None, "SMTP_HOST": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def use_email_service(app):
    def _install(service: EmailService) -> None:
        app.dependency_overrides[get_email_service_dep] = lambda: service

    yield _install
    app.dependency_overrides.pop(get_email_service_dep, None)


def test_resend_delivery(client, member_headers, use_email_service) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "re_123"})

    use_email_service(
        EmailService(_settings(RESEND_API_KEY="re_key"), transport=httpx.MockTransport(handler))
    )

    response = client.post(
        "/api/v1/email/send",
        json={**MESSAGE, "from": "Board <board@example.org>"},
        headers=member_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": "re_123"}
    assert seen[0].headers["Authorization"] == "Bearer re_key"


def test_smtp_placeholder(client, member_headers, use_email_service) -> None:
    use_email_service(
        EmailService(
            _settings(SMTP_HOST="smtp.example.org", SMTP_PORT=587, SMTP_USER="u", SMTP_PASS="p")
        )
    )

    response = client.post("/api/v1/email/send", json=MESSAGE, headers=member_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": "smtp-placeholder", "success": True}


def test_missing_configuration(client, member_headers, use_email_service) -> None:
    use_email_service(EmailService(_settings()))

    response = client.post("/api/v1/email/send", json=MESSAGE, headers=member_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "No email configuration available" in response.json()["error"]


def test_missing_fields(client, member_headers, use_email_service) -> None:
    use_email_service(EmailService(_settings(RESEND_API_KEY="re_key")))

    response = client.post("/api/v1/email/send", json={"to": "x@example.org"}, headers=member_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Missing required fields: to, subject, or html"}


def test_provider_failure(client, member_headers, use_email_service) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(422, json={"message": "Invalid from"}))
    use_email_service(EmailService(_settings(RESEND_API_KEY="re_key"), transport=transport))

    response = client.post("/api/v1/email/send", json=MESSAGE, headers=member_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "Invalid from" in response.json()["error"]


def test_requires_authentication(client) -> None:
    assert client.post("/api/v1/email/send", json=MESSAGE).status_code == status.HTTP_401_UNAUTHORIZED


def test_cors_preflight(client) -> None:
    response = client.options(
        "/api/v1/email/send",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert "access-control-allow-origin" in response.headers


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (b"not json", "not valid JSON"),
        (b'["resident@example.org"]', "Invalid request body"),
        (b'{"to": 5, "subject": "Hi", "html": "<p>x</p>"}', "Invalid request body"),
    ],
)
def test_malformed_body_uses_error_contract(
    client, member_headers, use_email_service, body, expected
) -> None:
    use_email_service(EmailService(_settings(RESEND_API_KEY="re_key")))

    response = client.post(
        "/api/v1/email/send",
        content=body,
        headers={**member_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert expected in response.json()["error"]
