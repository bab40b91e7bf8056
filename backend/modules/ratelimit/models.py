"""
Rate limiting data models.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RateLimitWindow:
    """Attempt counter for one key, started at a monotonic timestamp."""

    count: int
    started_at: float
    duration: float

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.duration


@dataclass(frozen=True)
class RateLimitStatus:
    """
    Outcome of an allowed attempt.

    Only used internally (logging, tests); responses never disclose the
    remaining budget.
    """

    key: str
    count: int
    limit: int
    resets_in: float

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


def build_rate_limit_key(
    scope: str, client_address: Optional[str], identity_id: Optional[str]
) -> str:
    """
    Build the key for a sensitive operation.

    The identity part keeps anonymous and authenticated attempts from the
    same address on separate budgets.
    """
    return f"{scope}:{client_address or 'unknown'}:{identity_id or ''}"
