"""Request dependencies: authentication, access rules and rate limits."""

from .auth import (
    OptionalAuth,
    RequireAccess,
    RequireAuth,
    bearer_scheme,
    get_current_user,
    get_optional_user,
)
from .rate_limit import RateLimit

__all__ = [
    "OptionalAuth",
    "RequireAccess",
    "RequireAuth",
    "bearer_scheme",
    "get_current_user",
    "get_optional_user",
    "RateLimit",
]
