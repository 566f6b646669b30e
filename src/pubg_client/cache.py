"""TTL 付きインメモリレスポンスキャッシュ"""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from .clock import Clock, SystemClock

DEFAULT_TTL_SECONDS = 300.0


class _CacheEntry:
    __slots__ = ("value", "stored_at")

    def __init__(self, value: Any, stored_at: float) -> None:
        self.value = value
        self.stored_at = stored_at


class ResponseCache:
    """Time-expiring key/value store.

    Entries are never deleted on expiry; a stale entry reads as absent
    and is overwritten by the next ``set`` for the same key. Values are
    deep-copied on the way in and out so callers cannot mutate cached
    responses.
    """

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, clock: Clock | None = None) -> None:
        self.ttl = ttl
        self._clock = clock or SystemClock()
        self._store: dict[str, _CacheEntry] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._store.get(key)
            if entry is None or self._clock.now() - entry.stored_at >= self.ttl:
                return None
            return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            self._store[key] = _CacheEntry(copy.deepcopy(value), self._clock.now())

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
