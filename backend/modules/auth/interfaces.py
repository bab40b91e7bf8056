"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.profiles.models import Profile

from .models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate an access token and return the authenticated user.

        Args:
            token: Access token from Supabase Auth

        Returns:
            AuthenticatedUser with claims and profile

        Raises:
            MissingTokenError: If no token was supplied
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
            UserNotFoundError: If the user has no profile
        """
        ...

    async def validate_optional_token(
        self, token: Optional[str]
    ) -> Optional[AuthenticatedUser]:
        """
        Validate a token if one is present.

        Never raises an authentication error: absent, invalid, expired or
        unknown tokens all resolve to None.
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Get a user's profile by their ID.

        Returns:
            Profile if found, None otherwise
        """
        ...

    async def get_user_by_email(self, email: str) -> Optional[Profile]:
        """
        Get a user's profile by their email (case-insensitive).

        Returns:
            Profile if found, None otherwise
        """
        ...
