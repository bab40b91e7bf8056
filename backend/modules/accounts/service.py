"""
Account service implementation.

The credential lifecycle: registration, email verification, login with
lockout, password reset and change, and account deletion. Each operation
coordinates the identity provider, the profile store, the token store and
the mailer.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

from modules.auth.models import AuthenticatedUser
from modules.identity.exceptions import (
    IdentityAlreadyExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from modules.identity.interfaces import IIdentityProvider
from modules.identity.models import Identity, SessionTokens
from modules.notifications.exceptions import MailDeliveryError
from modules.notifications.interfaces import INotificationService
from modules.notifications.models import Recipient
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import Profile, ProfileUpdate, Role, UserPage, UserStats
from shared.config import Settings
from shared.exceptions import (
    AccountLockedError,
    AccountsError,
    ExternalServiceError,
    InconsistentStateError,
    ValidationError,
)
from shared.logging_config import redact_email

from .interfaces import IAccountService
from .models import LoginResult, VerificationToken
from .tokens import VerificationTokenRepository
from .exceptions import (
    AccountNotFoundError,
    AlreadyVerifiedError,
    DeletionNotConfirmedError,
    EmailAlreadyRegisteredError,
    EmptyProfileUpdateError,
    InvalidOrExpiredTokenError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent"
)
DELETE_CONFIRMATION = "DELETE"
MAX_LOCKOUT_WRITE_RETRIES = 20


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _recipient(profile: Profile) -> Recipient:
    return Recipient(
        email=profile.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
    )


class AccountService(IAccountService):
    """
    Implementation of the account service.

    The identity provider is authoritative for credentials; the profile
    store holds everything else. Where a multi-step operation can stop
    halfway, the order of steps is chosen so that the partial state is
    either rolled back (registration) or harmless and logged (deletion).
    """

    def __init__(
        self,
        identity: IIdentityProvider,
        profiles: IProfileStore,
        notifications: INotificationService,
        verification_tokens: VerificationTokenRepository,
        reset_tokens: VerificationTokenRepository,
        settings: Settings,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._identity = identity
        self._profiles = profiles
        self._notifications = notifications
        self._verification_tokens = verification_tokens
        self._reset_tokens = reset_tokens
        self._settings = settings
        self._clock = clock

    # =========================================================================
    # Registration and verification
    # =========================================================================

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        language: str = "en",
    ) -> Profile:
        email = _normalize_email(email)
        first_name = first_name.strip()
        last_name = last_name.strip()
        if not first_name or not last_name:
            raise ValidationError("All fields are required")
        self._check_password(password)

        if await self._profiles.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError()

        try:
            identity = await self._identity.create_identity(
                email, password, f"{first_name} {last_name}"
            )
        except IdentityAlreadyExistsError:
            raise EmailAlreadyRegisteredError()

        profile = await self._create_profile(identity, first_name, last_name, language)
        logger.info(f"Registered user {profile.id}")

        await self._send_verification(profile, raise_on_failure=False)
        return profile

    async def _create_profile(
        self, identity: Identity, first_name: str, last_name: str, language: str
    ) -> Profile:
        """
        Write the profile for a freshly created identity.

        If the write fails the identity is deleted again so the email can
        be registered later. If that also fails the two stores disagree,
        which is reported as InconsistentStateError.
        """
        try:
            return await self._profiles.create(
                identity.id, identity.email, first_name, last_name, language
            )
        except AccountsError as profile_error:
            logger.error(
                f"Profile creation failed for identity {identity.id}, "
                f"rolling back: {profile_error.message}"
            )
            try:
                await self._identity.delete_identity(identity.id)
            except AccountsError as rollback_error:
                logger.critical(
                    f"Identity {identity.id} exists without a profile and could "
                    f"not be deleted: {rollback_error.message}"
                )
                raise InconsistentStateError(
                    "Registration could not be completed",
                    details={"user_id": identity.id},
                ) from rollback_error
            raise

    async def _send_verification(self, profile: Profile, raise_on_failure: bool) -> None:
        ttl = timedelta(hours=self._settings.verification_token_ttl_hours)
        try:
            token = await self._verification_tokens.issue(
                profile.id, profile.email, ttl, self._clock()
            )
            await self._notifications.send_verification_email(_recipient(profile), token)
        except ExternalServiceError as e:
            if raise_on_failure:
                logger.error(f"Failed to send verification email to user {profile.id}: {e.message}")
                raise MailDeliveryError("Failed to resend verification email") from e
            # The account exists; the user can ask for a new link.
            logger.warning(f"Verification email for user {profile.id} not sent: {e.message}")

    async def verify_email(self, token: str) -> Profile:
        record = await self._claim_token(
            self._verification_tokens, token, "Invalid or expired verification token"
        )

        try:
            profile = await self._profiles.set_email_verified(record.user_id)
        except AccountsError:
            await self._restore_token(self._verification_tokens, record)
            raise
        logger.info(f"Email verified for user {profile.id}")

        try:
            await self._identity.confirm_email(record.user_id)
        except AccountsError as e:
            logger.warning(
                f"Could not confirm email at identity provider for user "
                f"{record.user_id}: {e.message}"
            )

        await self._send_best_effort(
            "welcome", profile, self._notifications.send_welcome_email(_recipient(profile))
        )
        return profile

    async def resend_verification(self, email: str) -> None:
        profile = await self._profiles.get_by_email(_normalize_email(email))
        if profile is None:
            raise AccountNotFoundError()
        if profile.is_email_verified:
            raise AlreadyVerifiedError()

        await self._send_verification(profile, raise_on_failure=True)
        logger.info(f"Verification email resent to user {profile.id}")

    # =========================================================================
    # Password reset
    # =========================================================================

    async def forgot_password(self, email: str) -> str:
        profile = await self._profiles.get_by_email(_normalize_email(email))
        if profile is None:
            logger.info(f"Password reset requested for unknown email {redact_email(email)}")
            return FORGOT_PASSWORD_MESSAGE

        ttl = timedelta(hours=self._settings.password_reset_token_ttl_hours)
        token = await self._reset_tokens.issue(
            profile.id, profile.email, ttl, self._clock()
        )
        try:
            await self._notifications.send_password_reset_email(_recipient(profile), token)
        except ExternalServiceError as e:
            logger.error(f"Failed to send password reset email to user {profile.id}: {e.message}")
            raise MailDeliveryError("Failed to send password reset email") from e

        logger.info(f"Password reset email sent to user {profile.id}")
        return FORGOT_PASSWORD_MESSAGE

    async def reset_password(self, token: str, new_password: str) -> None:
        self._check_password(new_password)

        record = await self._claim_token(
            self._reset_tokens, token, "Invalid or expired reset token"
        )
        try:
            await self._identity.update_password(record.user_id, new_password)
        except AccountsError:
            await self._restore_token(self._reset_tokens, record)
            raise
        # A successful reset also lifts any login lockout.
        await self._profiles.clear_login_failures(record.user_id)
        logger.info(f"Password reset for user {record.user_id}")

    # =========================================================================
    # Sessions
    # =========================================================================

    async def login(self, email: str, password: str) -> LoginResult:
        email = _normalize_email(email)
        profile = await self._profiles.get_by_email(email)
        if profile is None:
            raise InvalidCredentialsError()

        now = self._clock()
        if profile.is_locked(now):
            logger.info(f"Login refused for locked user {profile.id}")
            raise AccountLockedError()

        try:
            _, tokens = await self._identity.verify_credential(email, password)
        except InvalidCredentialsError:
            await self._record_failed_login(profile, now)
            raise

        await self._profiles.clear_login_failures(profile.id, last_login=now)
        profile = profile.model_copy(
            update={"last_login": now, "login_attempts": 0, "lock_until": None}
        )
        logger.info(f"User {profile.id} logged in")
        return LoginResult(profile=profile, tokens=tokens)

    async def _record_failed_login(self, profile: Profile, now: datetime) -> None:
        """
        Count a failed login and lock the account once the limit is reached.

        The counter is written with a compare-and-set on the value it was
        computed from; when a concurrent failure wins the race the profile
        is re-read and the count recomputed, so no failure is lost.
        """
        for _ in range(MAX_LOCKOUT_WRITE_RETRIES):
            attempts = profile.login_attempts + 1
            if profile.lock_until is not None and profile.lock_until <= now:
                # The previous lock has run out; counting starts over.
                attempts = 1

            lock_until: Optional[datetime] = None
            if attempts >= self._settings.max_login_attempts:
                lock_until = now + timedelta(minutes=self._settings.lockout_duration_minutes)

            if await self._profiles.record_failed_login(
                profile.id, attempts, lock_until, expected_attempts=profile.login_attempts
            ):
                if lock_until is not None:
                    logger.warning(
                        f"Locking user {profile.id} until {lock_until.isoformat()} "
                        f"after {attempts} failed logins"
                    )
                return

            current = await self._profiles.get(profile.id)
            if current is None:
                return
            profile = current

        logger.error(f"Could not record failed login for user {profile.id}: counter contended")
        raise ExternalServiceError("Could not record failed login", service="supabase_db")

    async def refresh_session(self, refresh_token: str) -> SessionTokens:
        if not refresh_token:
            raise InvalidRefreshTokenError("Refresh token required")
        return await self._identity.refresh_session(refresh_token)

    async def logout(self, user: AuthenticatedUser) -> None:
        if not user.access_token:
            return
        try:
            await self._identity.sign_out(user.access_token)
        except AccountsError as e:
            logger.warning(f"Sign-out failed for user {user.id}: {e.message}")
        else:
            logger.info(f"User {user.id} logged out")

    # =========================================================================
    # Authenticated account management
    # =========================================================================

    async def change_password(
        self, user: AuthenticatedUser, current_password: str, new_password: str
    ) -> None:
        self._check_password(new_password, label="New password", field="newPassword")

        try:
            await self._identity.verify_credential(user.email, current_password)
        except InvalidCredentialsError:
            raise InvalidCredentialsError("Current password is incorrect")

        await self._identity.update_password(user.id, new_password)
        logger.info(f"Password changed for user {user.id}")

    async def delete_account(
        self, user: AuthenticatedUser, password: str, confirmation: str
    ) -> None:
        if confirmation != DELETE_CONFIRMATION:
            raise DeletionNotConfirmedError()

        try:
            await self._identity.verify_credential(user.email, password)
        except InvalidCredentialsError:
            raise InvalidCredentialsError("Password is incorrect")

        # Once the identity is gone the account is gone; what follows is
        # cleanup of local records.
        await self._identity.delete_identity(user.id)
        logger.info(f"Deleted identity for user {user.id}")

        cleanups: list[tuple[str, Callable[[str], Awaitable[bool]]]] = [
            ("profile", self._profiles.delete),
            ("verification token", self._verification_tokens.revoke),
            ("reset token", self._reset_tokens.revoke),
        ]
        for name, cleanup in cleanups:
            try:
                await cleanup(user.id)
            except AccountsError as e:
                logger.error(
                    f"Orphaned {name} for deleted user {user.id} needs cleanup: {e.message}"
                )

    async def update_profile(
        self, user: AuthenticatedUser, update: ProfileUpdate
    ) -> Profile:
        if update.is_empty():
            raise EmptyProfileUpdateError()
        profile = await self._profiles.apply_update(user.profile, update)
        logger.info(f"Profile updated for user {user.id}")
        return profile

    # =========================================================================
    # Administration
    # =========================================================================

    async def list_users(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        verified: Optional[bool] = None,
    ) -> UserPage:
        return await self._profiles.list_users(
            page=page, limit=limit, search=search, role=role, verified=verified
        )

    async def update_role(
        self, admin: AuthenticatedUser, user_id: str, role: Role
    ) -> Profile:
        profile = await self._profiles.set_role(user_id, role)
        logger.info(f"Admin {admin.id} set role of user {user_id} to {role.value}")
        return profile

    async def get_stats(self) -> UserStats:
        return await self._profiles.get_stats(self._clock())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_password(
        self, password: str, label: str = "Password", field: str = "password"
    ) -> None:
        min_length = self._settings.min_password_length
        if len(password or "") < min_length:
            raise WeakPasswordError(min_length, label=label, field=field)

    async def _claim_token(
        self, repository: VerificationTokenRepository, token: str, message: str
    ) -> VerificationToken:
        """
        Find, check and consume a single-use token.

        Expired tokens are deleted as they are found. If two callers race
        for the same token only the one whose delete succeeds proceeds.
        """
        record = await repository.find(token) if token else None
        if record is None:
            raise InvalidOrExpiredTokenError(message)

        if record.is_expired(self._clock()):
            await repository.consume(record)
            raise InvalidOrExpiredTokenError(message)

        if not await repository.consume(record):
            raise InvalidOrExpiredTokenError(message)
        return record

    async def _restore_token(
        self, repository: VerificationTokenRepository, record: VerificationToken
    ) -> None:
        """Give a claimed token back so the emailed link still works on retry."""
        try:
            await repository.restore(record)
        except AccountsError as e:
            logger.error(
                f"Could not restore {repository.purpose.value} token for user "
                f"{record.user_id}: {e.message}"
            )
        else:
            logger.info(f"Restored {repository.purpose.value} token for user {record.user_id}")

    async def _send_best_effort(
        self, kind: str, profile: Profile, send: Awaitable[str]
    ) -> None:
        try:
            await send
        except ExternalServiceError as e:
            logger.warning(f"Failed to send {kind} email to user {profile.id}: {e.message}")
