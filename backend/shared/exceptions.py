"""
Base exception classes for the accounts backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base to an HTTP status, so module exceptions only
choose the right parent and a stable code.
"""

from typing import Optional, Any


class AccountsError(Exception):
    """
    Base exception for all accounts errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AccountsError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = "VALIDATION_ERROR",
        details: Optional[dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message, code, details)
        self.field = field
        if field:
            self.details["field"] = field


class ConflictError(AccountsError):
    """Resource already exists."""

    pass


class NotFoundError(AccountsError):
    """Resource not found."""

    pass


class AuthenticationError(AccountsError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AccountsError):
    """Authorization failed (insufficient permissions)."""

    pass


class TooManyAttemptsError(AccountsError):
    """
    Attempt budget exhausted.

    The message is deliberately generic: the remaining budget and the
    window reset time are never disclosed to the caller.
    """

    def __init__(self, message: str = "Too many attempts, please try again later"):
        super().__init__(message, code="TOO_MANY_ATTEMPTS")


class AccountLockedError(AccountsError):
    """Account is temporarily locked after repeated failed logins."""

    def __init__(
        self,
        message: str = "Account temporarily locked due to too many failed login attempts",
    ):
        super().__init__(message, code="ACCOUNT_LOCKED")


class ExternalServiceError(AccountsError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = "SERVICE_UNAVAILABLE",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class InconsistentStateError(AccountsError):
    """
    A multi-step operation failed part way and could not be compensated.

    Raised for operator follow-up; never auto-repaired.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="INCONSISTENT_STATE", details=details)
