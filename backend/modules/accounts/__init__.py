"""
Accounts module.

The credential lifecycle: registration, email verification, login with
lockout, password reset and change, account deletion, and the admin
operations on profiles.

Public API:
- IAccountService: Interface for account operations
- Request models and LoginResult
- Account exceptions: EmailAlreadyRegisteredError, InvalidOrExpiredTokenError, etc.

The /api/auth router lives in accounts.routes and is imported by the app
factory, not here.
"""

from .interfaces import IAccountService
from .models import (
    TokenPurpose,
    VerificationToken,
    LoginResult,
    RegisterRequest,
    LoginRequest,
    TokenRequest,
    EmailRequest,
    ResetPasswordRequest,
    RefreshTokenRequest,
    ChangePasswordRequest,
    DeleteAccountRequest,
    UpdateRoleRequest,
)
from .exceptions import (
    EmailAlreadyRegisteredError,
    AccountNotFoundError,
    InvalidOrExpiredTokenError,
    AlreadyVerifiedError,
    WeakPasswordError,
    DeletionNotConfirmedError,
    EmptyProfileUpdateError,
)

__all__ = [
    # Interface
    "IAccountService",
    # Models
    "TokenPurpose",
    "VerificationToken",
    "LoginResult",
    "RegisterRequest",
    "LoginRequest",
    "TokenRequest",
    "EmailRequest",
    "ResetPasswordRequest",
    "RefreshTokenRequest",
    "ChangePasswordRequest",
    "DeleteAccountRequest",
    "UpdateRoleRequest",
    # Exceptions
    "EmailAlreadyRegisteredError",
    "AccountNotFoundError",
    "InvalidOrExpiredTokenError",
    "AlreadyVerifiedError",
    "WeakPasswordError",
    "DeletionNotConfirmedError",
    "EmptyProfileUpdateError",
]
