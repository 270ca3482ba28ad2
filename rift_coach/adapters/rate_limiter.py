"""Client-side rate limiting for the Riot API.

Riot development keys allow 20 requests per second and 100 requests per two
minutes. ``SlidingWindowRateLimiter`` enforces any number of such windows at
once: a request is admitted only when every window has room, and the slot is
then recorded in all of them.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)


class _Window:
    def __init__(self, limit: int, period: float) -> None:
        if limit < 1 or period <= 0:
            raise ValueError("rate limit window needs limit >= 1 and period > 0")
        self.limit = limit
        self.period = period
        self.timestamps: deque[float] = deque()

    def prune(self, now: float) -> None:
        cutoff = now - self.period
        while self.timestamps and self.timestamps[0] <= cutoff:
            self.timestamps.popleft()

    def wait_time(self, now: float) -> float:
        if len(self.timestamps) < self.limit:
            return 0.0
        return self.timestamps[0] + self.period - now


class SlidingWindowRateLimiter:
    """Wait until every configured window admits one more request."""

    def __init__(
        self,
        limits: list[tuple[int, float]],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._windows = [_Window(limit, period) for limit, period in limits]
        self._clock = clock

    def try_acquire(self) -> float:
        """Take a slot if one is free.

        Returns 0 on success, otherwise the seconds until a slot frees up.
        """
        now = self._clock()
        wait = 0.0
        for window in self._windows:
            window.prune(now)
            wait = max(wait, window.wait_time(now))
        if wait > 0:
            return wait
        for window in self._windows:
            window.timestamps.append(now)
        return 0.0

    async def acquire(self) -> None:
        while True:
            wait = self.try_acquire()
            if wait <= 0:
                return
            logger.debug("Riot API rate limit reached, waiting", extra={"delay": wait})
            await asyncio.sleep(wait)
