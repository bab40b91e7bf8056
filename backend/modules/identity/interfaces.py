"""
Identity module interface.

Other modules should depend on IIdentityProvider, not the concrete
Supabase implementation. This enables testing with fakes and swapping
the provider without touching the credential lifecycle.
"""

from typing import Protocol, runtime_checkable

from .models import Identity, SessionTokens, TokenClaims


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for identity provider operations.

    Every call that reaches the network is bounded by a timeout and raises
    ExternalServiceError when the provider is unavailable.
    """

    async def create_identity(
        self, email: str, password: str, display_name: str
    ) -> Identity:
        """
        Create a new identity.

        Raises:
            IdentityAlreadyExistsError: If the email is already registered
        """
        ...

    async def verify_credential(
        self, email: str, password: str
    ) -> tuple[Identity, SessionTokens]:
        """
        Check an email/password pair and open a session.

        Raises:
            InvalidCredentialsError: If the provider rejects the pair
        """
        ...

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify an access token's signature, audience and expiry.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
        """
        ...

    async def refresh_session(self, refresh_token: str) -> SessionTokens:
        """
        Exchange a refresh token for a new session.

        Raises:
            InvalidRefreshTokenError: If the refresh token does not verify
        """
        ...

    async def update_password(self, identity_id: str, new_password: str) -> None:
        """Set a new password for an identity."""
        ...

    async def confirm_email(self, identity_id: str) -> None:
        """Mark the identity's email as confirmed at the provider."""
        ...

    async def delete_identity(self, identity_id: str) -> None:
        """Delete an identity. Deleting a missing identity is not an error."""
        ...

    async def sign_out(self, access_token: str) -> None:
        """Revoke the provider session behind an access token."""
        ...

    async def health_check(self) -> bool:
        """Return True if the provider is reachable."""
        ...
