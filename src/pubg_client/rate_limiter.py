"""スライディングウィンドウ方式のレートリミッター"""

from __future__ import annotations

import asyncio
from collections import deque

import structlog

from .clock import Clock, SystemClock

logger = structlog.stdlib.get_logger(__name__)

DEFAULT_MAX_REQUESTS = 10
DEFAULT_WINDOW_SECONDS = 1.0


class SlidingWindowRateLimiter:
    """Admits at most ``max_requests`` within any trailing ``window`` seconds.

    The check-then-record sequence runs under a lock; the wait itself
    happens outside it. A caller that has to wait reserves its admission
    time while still holding the lock, so concurrent callers queue behind
    each other instead of jointly overrunning the window.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window: float = DEFAULT_WINDOW_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window <= 0:
            raise ValueError("window must be > 0")
        self.max_requests = max_requests
        self.window = window
        self._clock = clock or SystemClock()
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    def _purge(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window:
            self._timestamps.popleft()

    async def admit(self) -> float:
        """Block until a request may be issued and record it.

        Returns the timestamp recorded for the admitted request.
        """
        async with self._lock:
            now = self._clock.now()
            self._purge(now)
            admitted_at = now
            if len(self._timestamps) >= self.max_requests:
                # The slot frees when the entry max_requests back leaves the window.
                admitted_at = max(now, self._timestamps[-self.max_requests] + self.window)
            self._timestamps.append(admitted_at)

        wait_time = admitted_at - now
        if wait_time > 0:
            logger.debug("rate_limit.wait", wait_seconds=round(wait_time, 3))
            await self._clock.sleep(wait_time)
        return admitted_at

    def pending(self) -> int:
        """Number of requests currently counted in the window."""
        self._purge(self._clock.now())
        return len(self._timestamps)
