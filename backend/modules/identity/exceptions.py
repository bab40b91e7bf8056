"""
Identity module exceptions.

These exceptions are raised by the identity provider adapter and can be
caught by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ConflictError, NotFoundError


class InvalidTokenError(AuthenticationError):
    """Raised when an access token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when an access token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class InvalidCredentialsError(AuthenticationError):
    """Raised when the provider rejects an email/password pair."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token cannot be exchanged for a new session."""

    def __init__(self, message: str = "Invalid or expired refresh token"):
        super().__init__(message, code="INVALID_REFRESH_TOKEN")


class IdentityAlreadyExistsError(ConflictError):
    """Raised when the provider already holds an identity for an email."""

    def __init__(self, email: str):
        super().__init__(
            "User with this email already exists",
            code="EMAIL_ALREADY_REGISTERED",
        )
        self.email = email


class IdentityNotFoundError(NotFoundError):
    """Raised when the provider has no identity with the given id."""

    def __init__(self, identity_id: str):
        super().__init__(
            f"Identity not found: {identity_id}",
            code="IDENTITY_NOT_FOUND",
            details={"identity_id": identity_id},
        )
