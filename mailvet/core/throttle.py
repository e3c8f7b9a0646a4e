"""Tokens-per-interval throttle for outbound bursts."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from mailvet.core.logging import get_logger

logger = get_logger(__name__)


class Throttle:
    """
    Allow up to ``tokens_per_interval`` units of work per interval.

    Windows are measured on a monotonic clock. A window opens with the first
    acquisition after the previous one has elapsed, so idle time is credited.
    A caller that would overflow the open window sleeps for what is left of it
    and then opens the next one. Acquisitions are serialized, so concurrent
    callers sharing one instance never exceed the budget together.

    ``penalize`` doubles the interval (capped at ``max_interval_seconds``)
    when the upstream signals throttling, and ``reset`` restores the base
    interval. With tokens_per_interval equal to the bulk batch size, one batch
    passes per interval.
    """

    def __init__(
        self,
        tokens_per_interval: int = 10,
        interval_seconds: float = 0.1,
        max_interval_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if tokens_per_interval < 1:
            raise ValueError("tokens_per_interval must be at least 1")
        self.tokens_per_interval = tokens_per_interval
        self.base_interval = interval_seconds
        self.max_interval = max(max_interval_seconds, interval_seconds)
        self.interval = interval_seconds
        self._sleep = sleep
        self._clock = clock
        self._lock = asyncio.Lock()
        self._window_start: float | None = None
        self._used = 0

    async def acquire(self, tokens: int = 1) -> None:
        """Wait until ``tokens`` units fit in the current window."""
        async with self._lock:
            now = self._clock()
            if self._window_start is None or now - self._window_start >= self.interval:
                self._open_window(now)
            elif self._used + tokens > self.tokens_per_interval:
                # A request larger than the budget still passes alone in a fresh window
                await self._sleep(self._window_start + self.interval - now)
                self._open_window(self._clock())
            self._used += tokens

    def penalize(self) -> None:
        """Back off after an upstream throttling signal."""
        previous = self.interval
        self.interval = min(self.interval * 2, self.max_interval)
        if self.interval != previous:
            logger.bind(interval_seconds=self.interval).warning("throttle_backoff")

    def reset(self) -> None:
        """Return to the base interval."""
        self.interval = self.base_interval

    def _open_window(self, now: float) -> None:
        self._window_start = now
        self._used = 0
