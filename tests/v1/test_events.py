# tests/v1/test_events.py
"""Tests for event endpoints and the past/upcoming views."""

from datetime import UTC, datetime, timedelta, timezone

from fastapi import status

from bulletin_board.models import Event


def _event(db_session, title: str, start: datetime, end: datetime) -> Event:
    event = Event(title=title, start_time=start, end_time=end)
    db_session.add(event)
    db_session.flush()
    db_session.refresh(event)
    return event


def _payload(start: datetime, end: datetime, **extra) -> dict:
    return {
        "title": "Garden cleanup",
        "start_time": start.isoformat(),
        "end_time": end.isoformat(),
        **extra,
    }


def test_upcoming_and_past_split_on_end_time(client, db_session) -> None:
    now = datetime.now(UTC)
    ongoing = _event(db_session, "Ongoing", now - timedelta(hours=1), now + timedelta(hours=1))
    soon = _event(db_session, "Soon", now + timedelta(days=1), now + timedelta(days=1, hours=2))
    later = _event(db_session, "Later", now + timedelta(days=5), now + timedelta(days=5, hours=2))
    yesterday = _event(db_session, "Yesterday", now - timedelta(days=1), now - timedelta(hours=20))
    last_week = _event(db_session, "Last week", now - timedelta(days=7), now - timedelta(days=7) + timedelta(hours=3))

    upcoming = client.get("/api/v1/events/upcoming").json()
    past = client.get("/api/v1/events/past").json()

    assert [event["id"] for event in upcoming] == [ongoing.id, soon.id, later.id]
    assert [event["id"] for event in past] == [yesterday.id, last_week.id]


def test_default_limits(client, db_session) -> None:
    now = datetime.now(UTC)
    for day in range(1, 6):
        _event(db_session, f"Future {day}", now + timedelta(days=day), now + timedelta(days=day, hours=1))
        _event(db_session, f"Past {day}", now - timedelta(days=day, hours=1), now - timedelta(days=day))

    assert len(client.get("/api/v1/events/upcoming").json()) == 3
    assert len(client.get("/api/v1/events/past").json()) == 2
    assert len(client.get("/api/v1/events/upcoming", params={"limit": 5}).json()) == 5
    assert len(client.get("/api/v1/events/").json()) == 10


def test_create_normalises_to_utc(client, moderator_headers) -> None:
    eastern = timezone(timedelta(hours=-5))
    start = datetime(2030, 6, 1, 10, 0, tzinfo=eastern)

    response = client.post(
        "/api/v1/events/",
        json=_payload(start, start + timedelta(hours=2), location="Pocket park"),
        headers=moderator_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["location"] == "Pocket park"
    assert data["start_time"].startswith("2030-06-01T15:00:00")


def test_end_before_start_is_rejected(client, moderator_headers) -> None:
    start = datetime(2030, 6, 1, 10, 0, tzinfo=UTC)

    response = client.post(
        "/api/v1/events/",
        json=_payload(start, start - timedelta(minutes=1)),
        headers=moderator_headers,
    )

    assert response.status_code == 422


def test_event_management_is_moderator_only(client, member_headers, moderator_headers) -> None:
    start = datetime(2030, 6, 1, 10, 0, tzinfo=UTC)
    payload = _payload(start, start + timedelta(hours=1))

    assert client.post("/api/v1/events/", json=payload, headers=member_headers).status_code == 403

    created = client.post("/api/v1/events/", json=payload, headers=moderator_headers).json()
    url = f"/api/v1/events/{created['id']}"
    renamed = client.put(url, json={**payload, "title": "Garden party"}, headers=moderator_headers)
    assert renamed.json()["title"] == "Garden party"

    assert client.delete(url, headers=member_headers).status_code == 403
    assert client.delete(url, headers=moderator_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.put(url, json=payload, headers=moderator_headers).status_code == 404
