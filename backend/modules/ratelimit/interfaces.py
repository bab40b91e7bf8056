"""
Rate limiting module interface.
"""

from typing import Protocol, runtime_checkable

from .models import RateLimitStatus


@runtime_checkable
class IRateLimiter(Protocol):
    """Interface for attempt budgets over fixed time windows."""

    async def hit(self, key: str, max_attempts: int, window_seconds: int) -> RateLimitStatus:
        """
        Count one attempt for a key.

        Every call counts, whatever the outcome of the guarded operation.

        Raises:
            TooManyAttemptsError: Once the count exceeds max_attempts
                within the current window
        """
        ...

    async def reset(self, key: str) -> None:
        """Forget the window for a key."""
        ...
