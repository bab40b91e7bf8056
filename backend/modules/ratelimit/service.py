"""
In-process rate limiter.

Windows live in process memory and are not persisted beyond their
duration. Each hit increments and compares under a single asyncio.Lock,
so concurrent requests sharing a key cannot undercount.
"""

import asyncio
import logging
import time
from typing import Callable

from shared.exceptions import TooManyAttemptsError

from .interfaces import IRateLimiter
from .models import RateLimitStatus, RateLimitWindow

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 60


class RateLimiter(IRateLimiter):
    """
    Fixed-window attempt counter keyed by client address and identity.

    A window starts at the first attempt for a key. Once more than
    ``max_attempts`` attempts land inside it, further attempts fail until
    ``window_seconds`` have elapsed since the window started; the next
    attempt after that opens a fresh window.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        purge_threshold: int = 10_000,
    ):
        self._clock = clock
        self._purge_threshold = purge_threshold
        self._windows: dict[str, RateLimitWindow] = {}
        self._lock = asyncio.Lock()

    async def hit(self, key: str, max_attempts: int, window_seconds: int) -> RateLimitStatus:
        if max_attempts <= 0:
            return RateLimitStatus(key=key, count=0, limit=max_attempts, resets_in=0.0)
        if window_seconds <= 0:
            logger.warning(
                f"Invalid rate limit window {window_seconds}s for {key}; "
                f"defaulting to {DEFAULT_WINDOW_SECONDS}s"
            )
            window_seconds = DEFAULT_WINDOW_SECONDS

        async with self._lock:
            now = self._clock()
            if len(self._windows) >= self._purge_threshold:
                self._purge(now)
            window = self._windows.get(key)
            if window is None or window.expired(now):
                window = RateLimitWindow(count=0, started_at=now, duration=window_seconds)
                self._windows[key] = window
            window.count += 1
            count = window.count
            resets_in = window.started_at + window.duration - now

        if count > max_attempts:
            logger.warning(f"Rate limit exceeded for {key} ({count}/{max_attempts})")
            raise TooManyAttemptsError()

        return RateLimitStatus(key=key, count=count, limit=max_attempts, resets_in=resets_in)

    async def reset(self, key: str) -> None:
        async with self._lock:
            self._windows.pop(key, None)

    async def clear(self) -> None:
        """Forget every window."""
        async with self._lock:
            self._windows.clear()

    async def purge_expired(self) -> int:
        """
        Drop windows whose duration has elapsed.

        Returns:
            Number of windows removed
        """
        async with self._lock:
            return self._purge(self._clock())

    def _purge(self, now: float) -> int:
        stale = [key for key, window in self._windows.items() if window.expired(now)]
        for key in stale:
            del self._windows[key]
        if stale:
            logger.debug(f"Purged {len(stale)} expired rate limit windows")
        return len(stale)

    def __len__(self) -> int:
        return len(self._windows)
