"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, AuthorizationError
from modules.identity.exceptions import InvalidTokenError, ExpiredTokenError


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message, code="MISSING_TOKEN")


class AuthenticationRequiredError(AuthenticationError):
    """Raised by the access gate when no verified identity is attached."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTHENTICATION_REQUIRED")


class UserNotFoundError(AuthenticationError):
    """
    Raised when a verified token's user has no profile.

    The identity exists upstream but local state is inconsistent; this is
    treated as an authentication failure, never silently healed.
    """

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class EmailNotVerifiedError(AuthorizationError):
    """Raised when an operation requires a verified email address."""

    def __init__(self):
        super().__init__("Email verification required", code="EMAIL_NOT_VERIFIED")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_roles: list[str], user_role: str):
        super().__init__(
            "Insufficient permissions",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_roles": required_roles, "user_role": user_role},
        )


class PremiumRequiredError(AuthorizationError):
    """Raised when an operation requires an active paid subscription."""

    def __init__(self):
        super().__init__("Premium subscription required", code="PREMIUM_REQUIRED")


__all__ = [
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthenticationRequiredError",
    "UserNotFoundError",
    "EmailNotVerifiedError",
    "InsufficientPermissionsError",
    "PremiumRequiredError",
]
