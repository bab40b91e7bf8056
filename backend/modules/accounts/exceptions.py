"""
Accounts module exceptions.

These exceptions are raised by the credential lifecycle and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self):
        super().__init__(
            "User with this email already exists",
            code="EMAIL_ALREADY_REGISTERED",
        )


class AccountNotFoundError(NotFoundError):
    """Raised when no account matches the given email."""

    def __init__(self):
        super().__init__("User not found", code="USER_NOT_FOUND")


class InvalidOrExpiredTokenError(ValidationError):
    """Raised when a verification or reset token is unknown, used or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_OR_EXPIRED_TOKEN", field="token")


class AlreadyVerifiedError(ValidationError):
    """Raised when asking to re-verify an already verified email."""

    def __init__(self):
        super().__init__("Email is already verified", code="ALREADY_VERIFIED")


class WeakPasswordError(ValidationError):
    """Raised when a new password does not meet the minimum length."""

    def __init__(self, min_length: int, label: str = "Password", field: str = "password"):
        super().__init__(
            f"{label} must be at least {min_length} characters long",
            code="WEAK_PASSWORD",
            field=field,
        )


class DeletionNotConfirmedError(ValidationError):
    """Raised when account deletion is not explicitly confirmed."""

    def __init__(self):
        super().__init__(
            'Please type "DELETE" to confirm account deletion',
            code="DELETION_NOT_CONFIRMED",
            field="confirmation",
        )


class EmptyProfileUpdateError(ValidationError):
    """Raised when a profile update carries no changes."""

    def __init__(self):
        super().__init__("No valid updates provided", code="EMPTY_UPDATE")
