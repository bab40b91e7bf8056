"""
Identity module.

Adapter for the managed identity provider (Supabase Auth): creates and
deletes identities, checks passwords, issues and refreshes sessions and
verifies access tokens.

Public API:
- IIdentityProvider: Interface for identity provider operations
- Identity, TokenClaims, SessionTokens: Provider data as seen by the core
- Identity exceptions: InvalidCredentialsError, ExpiredTokenError, etc.
"""

from .interfaces import IIdentityProvider
from .models import Identity, TokenClaims, SessionTokens
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    IdentityAlreadyExistsError,
    IdentityNotFoundError,
)

__all__ = [
    # Interface
    "IIdentityProvider",
    # Models
    "Identity",
    "TokenClaims",
    "SessionTokens",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "IdentityAlreadyExistsError",
    "IdentityNotFoundError",
]
