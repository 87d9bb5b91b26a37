# tests/v1/test_announcements.py
"""Tests for announcement endpoints."""

from fastapi import status


def _create(client, headers, title="Snow removal", content="Plows start at 6am"):
    return client.post(
        "/api/v1/announcements/",
        json={"title": title, "content": content},
        headers=headers,
    )


def test_moderator_publishes_and_everyone_reads(client, board_member, moderator_headers) -> None:
    first = _create(client, moderator_headers, title="First").json()
    second = _create(client, moderator_headers, title="Second").json()

    response = client.get("/api/v1/announcements/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [item["id"] for item in data] == [second["id"], first["id"]]
    assert data[0]["author_email"] == board_member.email


def test_members_cannot_publish(client, member_headers) -> None:
    assert _create(client, member_headers).status_code == status.HTTP_403_FORBIDDEN


def test_only_author_may_update_or_delete(client, moderator_headers, admin_headers) -> None:
    created = _create(client, moderator_headers).json()
    url = f"/api/v1/announcements/{created['id']}"
    payload = {"title": "Snow removal (updated)", "content": "Plows start at 5am"}

    assert client.put(url, json=payload, headers=admin_headers).status_code == status.HTTP_403_FORBIDDEN
    assert client.delete(url, headers=admin_headers).status_code == status.HTTP_403_FORBIDDEN

    updated = client.put(url, json=payload, headers=moderator_headers)
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["title"] == "Snow removal (updated)"

    assert client.delete(url, headers=moderator_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/announcements/").json() == []


def test_demoted_author_loses_edit_rights(client, board_member, moderator_headers, db_session) -> None:
    created = _create(client, moderator_headers).json()
    board_member.profile.role = "member"
    db_session.commit()

    response = client.delete(f"/api/v1/announcements/{created['id']}", headers=moderator_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unknown_announcement(client, moderator_headers) -> None:
    response = client.put(
        "/api/v1/announcements/404",
        json={"title": "x", "content": "y"},
        headers=moderator_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
