"""Async view-model client for the bulletin board API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, Literal

import httpx

from bulletin_board.client.cache import QueryCache
from bulletin_board.client.errors import BoardClientError
from bulletin_board.client.forms import validate_post_form
from bulletin_board.client.layout import LayoutPreferenceCache
from bulletin_board.client.session import ClientSession

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Cache entities
POSTS = "posts"
PENDING_POSTS = "pending_posts"
PENDING_POSTS_COUNT = "pending_posts_count"
ANNOUNCEMENTS = "announcements"
UPCOMING_EVENTS = "upcoming_events"
PAST_EVENTS = "past_events"
EVENTS = "events"
LINKS = "links"
QUICK_LINKS = "quick_links"
SETTINGS = "settings"
USERS = "users"

_EVENT_ENTITIES = (EVENTS, UPCOMING_EVENTS, PAST_EVENTS)

SEARCH_RETRIES = 1
# Seconds before a cached read is fetched again without an explicit invalidation.
DEFAULT_STALE_TIME = 60.0


class BulletinBoardClient:
    """Talk to the board API on behalf of one signed-in (or anonymous) user.

    Reads go through a :class:`QueryCache`; every mutation invalidates the
    entities it is known to affect and nothing else.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        session: ClientSession | None = None,
        cache: QueryCache | None = None,
        layout_cache: LayoutPreferenceCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session or ClientSession()
        self.cache = cache or QueryCache(stale_time=DEFAULT_STALE_TIME)
        self.layout_cache = layout_cache
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> BulletinBoardClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._http.request(
                method,
                f"{API_PREFIX}{path}",
                json=json,
                params={k: v for k, v in (params or {}).items() if v is not None},
                headers=self.session.auth_headers(),
            )
        except httpx.HTTPError as exc:
            raise BoardClientError(f"Request failed: {exc}") from exc

        if response.status_code >= 400:
            raise BoardClientError(_error_detail(response), status_code=response.status_code)
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    def _invalidate(self, *entities: str) -> None:
        for entity in entities:
            self.cache.invalidate(entity)

    # Session

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        return await self._request("POST", "/auth/register", json={"email": email, "password": password})

    async def sign_in(self, email: str, password: str) -> ClientSession:
        """Sign in, then refresh the session and drop data cached for the previous user."""
        token = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.access_token = token["access_token"]
        self.cache.clear()
        return await self.reload_session()

    async def sign_out(self) -> ClientSession:
        if self.session.access_token is not None:
            try:
                await self._request("POST", "/auth/logout")
            except BoardClientError as exc:
                logger.warning("Sign-out request failed: %s", exc)
        self.session.clear()
        self.cache.clear()
        return self.session

    async def reload_session(self) -> ClientSession:
        try:
            return await self.session.refresh(self._http)
        except httpx.HTTPError as exc:
            raise BoardClientError(f"Session refresh failed: {exc}") from exc

    # Posts

    async def list_posts(self, search: str | None = None) -> list[dict[str, Any]]:
        """Approved posts, newest first; each search term is its own query."""
        term = search or None

        async def load() -> list[dict[str, Any]]:
            return await self._request("GET", "/posts/", params={"q": term})  # type: ignore[no-any-return]

        return await self.cache.fetch(POSTS, {"q": term}, lambda: _with_retry(load, SEARCH_RETRIES))

    async def get_post(self, post_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/posts/{post_id}")  # type: ignore[no-any-return]

    async def submit_post(self, title: str, content: str) -> dict[str, Any]:
        """Validate and submit a post.

        Raises:
            BoardValidationError: Before any request when the form is invalid.
            BoardClientError: When the server rejects the submission.
        """
        form = validate_post_form(title, content)
        post = await self._request("POST", "/posts/", json=form.model_dump())
        self._invalidate(POSTS, PENDING_POSTS, PENDING_POSTS_COUNT)
        return post  # type: ignore[no-any-return]

    async def pending_posts(self) -> list[dict[str, Any]]:
        return await self.cache.fetch(
            PENDING_POSTS, None, lambda: self._request("GET", "/moderation/queue")
        )

    async def pending_posts_count(self) -> int:
        payload = await self.cache.fetch(
            PENDING_POSTS_COUNT, None, lambda: self._request("GET", "/posts/pending-count")
        )
        return int(payload["count"])

    async def _mutate(
        self,
        method: str,
        path: str,
        *entities: str,
        json: Any | None = None,
    ) -> Any:
        """Send a change and invalidate `entities` whether or not it succeeded."""
        try:
            return await self._request(method, path, json=json)
        finally:
            self._invalidate(*entities)

    async def _moderate(self, method: str, path: str, json: Any | None = None) -> Any:
        return await self._mutate(method, path, PENDING_POSTS, PENDING_POSTS_COUNT, POSTS, json=json)

    async def approve_post(self, post_id: int) -> dict[str, Any]:
        return await self._moderate("POST", f"/moderation/posts/{post_id}/approve")  # type: ignore[no-any-return]

    async def reject_post(self, post_id: int) -> dict[str, Any]:
        return await self._moderate("POST", f"/moderation/posts/{post_id}/reject")  # type: ignore[no-any-return]

    async def edit_post(self, post_id: int, title: str, content: str) -> dict[str, Any]:
        form = validate_post_form(title, content)
        return await self._moderate(  # type: ignore[no-any-return]
            "PATCH", f"/moderation/posts/{post_id}", json=form.model_dump()
        )

    async def delete_post(self, post_id: int) -> None:
        await self._moderate("DELETE", f"/posts/{post_id}")

    # Announcements and events

    async def announcements(self) -> list[dict[str, Any]]:
        return await self.cache.fetch(
            ANNOUNCEMENTS, None, lambda: self._request("GET", "/announcements/")
        )

    async def upcoming_events(self, limit: int | None = None) -> list[dict[str, Any]]:
        return await self.cache.fetch(
            UPCOMING_EVENTS,
            {"limit": limit},
            lambda: self._request("GET", "/events/upcoming", params={"limit": limit}),
        )

    async def past_events(self, limit: int | None = None) -> list[dict[str, Any]]:
        return await self.cache.fetch(
            PAST_EVENTS,
            {"limit": limit},
            lambda: self._request("GET", "/events/past", params={"limit": limit}),
        )

    async def events(self) -> list[dict[str, Any]]:
        return await self.cache.fetch(EVENTS, None, lambda: self._request("GET", "/events/"))

    async def create_announcement(self, title: str, content: str) -> dict[str, Any]:
        return await self._mutate(  # type: ignore[no-any-return]
            "POST", "/announcements/", ANNOUNCEMENTS, json={"title": title, "content": content}
        )

    async def update_announcement(self, announcement_id: int, title: str, content: str) -> dict[str, Any]:
        return await self._mutate(  # type: ignore[no-any-return]
            "PUT",
            f"/announcements/{announcement_id}",
            ANNOUNCEMENTS,
            json={"title": title, "content": content},
        )

    async def delete_announcement(self, announcement_id: int) -> None:
        await self._mutate("DELETE", f"/announcements/{announcement_id}", ANNOUNCEMENTS)

    async def create_event(
        self,
        title: str,
        start_time: datetime,
        end_time: datetime,
        *,
        description: str | None = None,
        location: str | None = None,
    ) -> dict[str, Any]:
        payload = _event_payload(title, start_time, end_time, description, location)
        return await self._mutate("POST", "/events/", *_EVENT_ENTITIES, json=payload)  # type: ignore[no-any-return]

    async def update_event(
        self,
        event_id: int,
        title: str,
        start_time: datetime,
        end_time: datetime,
        *,
        description: str | None = None,
        location: str | None = None,
    ) -> dict[str, Any]:
        """Replace an event; it may move between the past and upcoming lists."""
        payload = _event_payload(title, start_time, end_time, description, location)
        return await self._mutate(  # type: ignore[no-any-return]
            "PUT", f"/events/{event_id}", *_EVENT_ENTITIES, json=payload
        )

    async def delete_event(self, event_id: int) -> None:
        await self._mutate("DELETE", f"/events/{event_id}", *_EVENT_ENTITIES)

    # Links

    async def links(self) -> list[dict[str, Any]]:
        return await self.cache.fetch(LINKS, None, lambda: self._request("GET", "/links/"))

    async def quick_links(self) -> list[dict[str, Any]]:
        return await self.cache.fetch(QUICK_LINKS, None, lambda: self._request("GET", "/links/quick"))

    async def create_link(
        self,
        title: str,
        url: str,
        *,
        description: str | None = None,
        is_quick_link: bool = False,
    ) -> dict[str, Any]:
        link = await self._request(
            "POST",
            "/links/",
            json={
                "title": title,
                "url": url,
                "description": description,
                "is_quick_link": is_quick_link,
            },
        )
        self._invalidate(QUICK_LINKS if is_quick_link else LINKS)
        return link  # type: ignore[no-any-return]

    async def update_link(
        self,
        link_id: int,
        title: str,
        url: str,
        *,
        description: str | None = None,
        is_quick_link: bool = False,
    ) -> dict[str, Any]:
        """Replace a link; toggling `is_quick_link` moves it between both lists."""
        return await self._mutate(  # type: ignore[no-any-return]
            "PUT",
            f"/links/{link_id}",
            LINKS,
            QUICK_LINKS,
            json={
                "title": title,
                "url": url,
                "description": description,
                "is_quick_link": is_quick_link,
            },
        )

    async def delete_link(self, link_id: int) -> None:
        await self._mutate("DELETE", f"/links/{link_id}", LINKS, QUICK_LINKS)

    async def move_quick_link(
        self,
        link_id: int,
        direction: Literal["up", "down"],
    ) -> list[dict[str, Any]]:
        return await self._mutate(  # type: ignore[no-any-return]
            "POST", f"/links/{link_id}/move", QUICK_LINKS, json={"direction": direction}
        )

    # Users

    async def users(self) -> list[dict[str, Any]]:
        return await self.cache.fetch(USERS, None, lambda: self._request("GET", "/users/"))

    async def set_role(self, user_id: str, role: Literal["member", "board_member", "admin"]) -> dict[str, Any]:
        """Change a user's role; the signed-in user's own session is refreshed."""
        profile: dict[str, Any] = await self._mutate(
            "PUT", f"/users/{user_id}/role", USERS, json={"role": role}
        )
        if user_id == self.session.user_id:
            await self.reload_session()
        return profile

    # Settings

    def cached_narrow_layout(self) -> bool | None:
        """Layout preference available before the settings fetch resolves."""
        if self.layout_cache is None:
            return None
        return self.layout_cache.read()

    async def community_settings(self) -> dict[str, Any]:
        record: dict[str, Any] = await self.cache.fetch(
            SETTINGS, None, lambda: self._request("GET", "/settings/")
        )
        if self.layout_cache is not None:
            self.layout_cache.reconcile(record)
        return record

    async def update_settings(self, **changes: Any) -> dict[str, Any]:
        """Update the settings record by the id it was fetched with."""
        current = await self.community_settings()
        record: dict[str, Any] = await self._request("PUT", f"/settings/{current['id']}", json=changes)
        self._invalidate(SETTINGS)
        if self.layout_cache is not None:
            self.layout_cache.reconcile(record)
        return record


def _event_payload(
    title: str,
    start_time: datetime,
    end_time: datetime,
    description: str | None,
    location: str | None,
) -> dict[str, Any]:
    return {
        "title": title,
        "start_time": start_time.isoformat(),
        "end_time": end_time.isoformat(),
        "description": description,
        "location": location,
    }


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if detail is not None:
            return detail if isinstance(detail, str) else str(detail)
    return response.text


async def _with_retry(load: Callable[[], Awaitable[Any]], retries: int) -> Any:
    """Retry network and server failures; client errors are raised at once."""
    attempt = 0
    while True:
        try:
            return await load()
        except BoardClientError as exc:
            if attempt >= retries or (exc.status_code is not None and exc.status_code < 500):
                raise
            attempt += 1
            logger.warning("Retrying after failed request (%d/%d): %s", attempt, retries, exc)
