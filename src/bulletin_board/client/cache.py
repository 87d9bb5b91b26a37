"""Client-side query cache keyed by entity and filter parameters."""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryKey = tuple[str, tuple[tuple[str, Any], ...]]


def make_key(entity: str, params: Mapping[str, Any] | None = None) -> QueryKey:
    """Build the cache key for `entity` with `params` in sorted order."""
    return entity, tuple(sorted((params or {}).items()))


@dataclass
class _Entry:
    value: Any
    ticket: int
    stored_at: float


class QueryCache:
    """Cache query results per (entity, params) until invalidated or stale.

    Every fetch takes a ticket when it starts. A result is stored only if no
    fetch that started later has already stored its result and the entity
    was not invalidated after the fetch started, so a superseded fetch never
    overwrites newer data.

    Invalidation is explicit and per entity. Nothing invalidates across
    entities on its own.
    """

    def __init__(
        self,
        stale_time: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stale_time = stale_time
        self._clock = clock
        self._tickets = itertools.count(1)
        self._entries: dict[QueryKey, _Entry] = {}
        self._invalidated: dict[str, int] = {}
        self._cleared = 0

    def _is_fresh(self, entry: _Entry) -> bool:
        if self.stale_time is None:
            return True
        return self._clock() - entry.stored_at < self.stale_time

    def get(self, entity: str, params: Mapping[str, Any] | None = None) -> Any | None:
        """Return the fresh cached value for the key, or None."""
        entry = self._entries.get(make_key(entity, params))
        if entry is None or not self._is_fresh(entry):
            return None
        return entry.value

    def _store(self, key: QueryKey, value: Any, ticket: int) -> bool:
        entity = key[0]
        if ticket < max(self._invalidated.get(entity, 0), self._cleared):
            return False
        current = self._entries.get(key)
        if current is not None and current.ticket > ticket:
            return False
        self._entries[key] = _Entry(value=value, ticket=ticket, stored_at=self._clock())
        return True

    async def fetch(
        self,
        entity: str,
        params: Mapping[str, Any] | None,
        loader: Callable[[], Awaitable[T]],
        *,
        force: bool = False,
    ) -> T:
        """Return the cached value for the key, loading it when missing or stale.

        Args:
            entity: Entity name, the unit of invalidation.
            params: Filter parameters that are part of the key.
            loader: Coroutine factory that performs the request.
            force: Load even when a fresh value is cached.
        """
        key = make_key(entity, params)
        entry = self._entries.get(key)
        if not force and entry is not None and self._is_fresh(entry):
            return entry.value  # type: ignore[no-any-return]

        ticket = next(self._tickets)
        value = await loader()
        if not self._store(key, value, ticket):
            logger.debug("Discarding superseded result for %s", key)
        return value

    def invalidate(self, entity: str) -> None:
        """Drop every entry of `entity` and ignore its in-flight fetches."""
        self._invalidated[entity] = next(self._tickets)
        for key in [key for key in self._entries if key[0] == entity]:
            del self._entries[key]

    def clear(self) -> None:
        """Drop everything, e.g. when the signed-in user changes."""
        self._cleared = next(self._tickets)
        self._entries.clear()
