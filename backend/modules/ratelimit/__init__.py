"""
Rate limiting module.

Bounds how often sensitive operations (login, registration, password
reset...) may be attempted per client address and identity.

Public API:
- IRateLimiter: Interface for rate limiting
- RateLimitStatus: Outcome of an allowed attempt
- TooManyAttemptsError: Raised once a budget is exhausted
"""

from shared.exceptions import TooManyAttemptsError

from .interfaces import IRateLimiter
from .models import RateLimitStatus, RateLimitWindow, build_rate_limit_key

__all__ = [
    # Interface
    "IRateLimiter",
    # Models
    "RateLimitStatus",
    "RateLimitWindow",
    "build_rate_limit_key",
    # Exceptions
    "TooManyAttemptsError",
]
