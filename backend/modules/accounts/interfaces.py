"""
Accounts module interface.

Other modules should depend on IAccountService, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.auth.models import AuthenticatedUser
from modules.identity.models import SessionTokens
from modules.profiles.models import Profile, ProfileUpdate, Role, UserPage, UserStats

from .models import LoginResult


@runtime_checkable
class IAccountService(Protocol):
    """
    Interface for the credential lifecycle.

    Registration, verification, login lockout, password reset and change,
    and account deletion, coordinating the identity provider, the profile
    store, the token store and the mailer.
    """

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        language: str = "en",
    ) -> Profile:
        """
        Create an identity and its profile, then send a verification email.

        Raises:
            WeakPasswordError: If the password is too short
            EmailAlreadyRegisteredError: If the email is taken
            InconsistentStateError: If the profile write failed and the
                identity could not be rolled back
        """
        ...

    async def verify_email(self, token: str) -> Profile:
        """
        Consume a verification token and mark the email verified.

        Raises:
            InvalidOrExpiredTokenError: If the token is unknown, used or expired
        """
        ...

    async def resend_verification(self, email: str) -> None:
        """
        Issue a fresh verification token, invalidating any previous one.

        Raises:
            AccountNotFoundError: If no account has this email
            AlreadyVerifiedError: If the email is already verified
        """
        ...

    async def forgot_password(self, email: str) -> str:
        """
        Send a reset link if the account exists.

        Returns the same message whether or not it does.
        """
        ...

    async def reset_password(self, token: str, new_password: str) -> None:
        """
        Consume a reset token and set a new password.

        The password is checked before the token is looked up, so a weak
        password never uses up the token.
        """
        ...

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Sign in with email and password, enforcing the login lockout.

        Raises:
            AccountLockedError: If the account is locked
            InvalidCredentialsError: If the email or password is wrong
        """
        ...

    async def refresh_session(self, refresh_token: str) -> SessionTokens:
        """Exchange a refresh token for new session tokens."""
        ...

    async def logout(self, user: AuthenticatedUser) -> None:
        """Revoke the caller's session at the identity provider (best effort)."""
        ...

    async def change_password(
        self, user: AuthenticatedUser, current_password: str, new_password: str
    ) -> None:
        """Change the password after re-checking the current one."""
        ...

    async def delete_account(
        self, user: AuthenticatedUser, password: str, confirmation: str
    ) -> None:
        """Delete the identity, then its profile and outstanding tokens."""
        ...

    async def update_profile(
        self, user: AuthenticatedUser, update: ProfileUpdate
    ) -> Profile:
        """Apply allow-listed changes to the caller's profile."""
        ...

    async def list_users(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        verified: Optional[bool] = None,
    ) -> UserPage:
        """List users for administration."""
        ...

    async def update_role(
        self, admin: AuthenticatedUser, user_id: str, role: Role
    ) -> Profile:
        """Change another user's role."""
        ...

    async def get_stats(self) -> UserStats:
        """Aggregate user counts for the admin dashboard."""
        ...
