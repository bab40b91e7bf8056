"""
Identity provider implementation.

Uses Supabase Auth: the admin API (service-role client) to manage
identities, anon-key clients to sign users in and refresh sessions, and
the project JWT secret to verify access tokens locally.
"""

import logging
from typing import Any, Callable

import jwt
from pydantic import ValidationError as PydanticValidationError
from supabase import AuthApiError, Client

from shared.config import Settings
from shared.external import call_external

from .interfaces import IIdentityProvider
from .models import Identity, SessionTokens, TokenClaims
from .exceptions import (
    ExpiredTokenError,
    IdentityAlreadyExistsError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
)

logger = logging.getLogger(__name__)


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Implementation of the identity provider on Supabase Auth.

    The Supabase project must allow sign-in before email confirmation:
    verification is owned by this backend (its own tokens and emails),
    and confirm_email() is called once the user proves the address.
    """

    SERVICE_NAME = "supabase_auth"

    def __init__(
        self,
        admin_client: Client,
        settings: Settings,
        anon_client_factory: Callable[[], Client],
    ):
        self._admin = admin_client
        self._settings = settings
        self._anon_client_factory = anon_client_factory
        self._timeout = settings.external_timeout_seconds

    async def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        return await call_external(
            self.SERVICE_NAME, operation, func, *args, timeout=self._timeout
        )

    async def create_identity(
        self, email: str, password: str, display_name: str
    ) -> Identity:
        def _create() -> Identity:
            try:
                response = self._admin.auth.admin.create_user(
                    {
                        "email": email,
                        "password": password,
                        "email_confirm": False,
                        "user_metadata": {"display_name": display_name},
                    }
                )
            except AuthApiError as e:
                if _is_duplicate_email(e):
                    raise IdentityAlreadyExistsError(email)
                raise
            return _map_identity(response.user)

        return await self._run("create_user", _create)

    async def verify_credential(
        self, email: str, password: str
    ) -> tuple[Identity, SessionTokens]:
        def _sign_in() -> tuple[Identity, SessionTokens]:
            client = self._anon_client_factory()
            try:
                response = client.auth.sign_in_with_password(
                    {"email": email, "password": password}
                )
            except AuthApiError as e:
                if e.status in (400, 401, 403):
                    raise InvalidCredentialsError()
                raise
            if response.user is None or response.session is None:
                raise InvalidCredentialsError()
            return _map_identity(response.user), _map_session(response.session)

        return await self._run("sign_in_with_password", _sign_in)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify a Supabase access token locally with the JWT secret.

        This is CPU-only, so it is not routed through call_external().
        """
        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience=self._settings.supabase_jwt_audience,
            )
            return TokenClaims(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected access token: {e}")
            raise InvalidTokenError()
        except PydanticValidationError:
            raise InvalidTokenError("Authentication token is missing required claims")

    async def refresh_session(self, refresh_token: str) -> SessionTokens:
        def _refresh() -> SessionTokens:
            client = self._anon_client_factory()
            try:
                response = client.auth.refresh_session(refresh_token)
            except AuthApiError as e:
                logger.debug(f"Refresh token rejected: {e.message}")
                raise InvalidRefreshTokenError()
            if response.session is None:
                raise InvalidRefreshTokenError()
            return _map_session(response.session)

        return await self._run("refresh_session", _refresh)

    async def update_password(self, identity_id: str, new_password: str) -> None:
        def _update() -> None:
            try:
                self._admin.auth.admin.update_user_by_id(
                    identity_id, {"password": new_password}
                )
            except AuthApiError as e:
                if e.status == 404:
                    raise IdentityNotFoundError(identity_id)
                raise

        await self._run("update_password", _update)

    async def confirm_email(self, identity_id: str) -> None:
        def _confirm() -> None:
            try:
                self._admin.auth.admin.update_user_by_id(
                    identity_id, {"email_confirm": True}
                )
            except AuthApiError as e:
                if e.status == 404:
                    raise IdentityNotFoundError(identity_id)
                raise

        await self._run("confirm_email", _confirm)

    async def delete_identity(self, identity_id: str) -> None:
        def _delete() -> None:
            try:
                self._admin.auth.admin.delete_user(identity_id)
            except AuthApiError as e:
                if e.status == 404:
                    logger.info(f"Identity {identity_id} already deleted")
                    return
                raise

        await self._run("delete_user", _delete)

    async def sign_out(self, access_token: str) -> None:
        await self._run("sign_out", self._admin.auth.admin.sign_out, access_token)

    async def health_check(self) -> bool:
        def _ping() -> bool:
            self._admin.auth.admin.list_users(page=1, per_page=1)
            return True

        return await self._run("health_check", _ping)


def _is_duplicate_email(error: AuthApiError) -> bool:
    if getattr(error, "code", None) == "email_exists":
        return True
    return "already" in (error.message or "").lower()


def _map_identity(user: Any) -> Identity:
    return Identity(
        id=str(user.id),
        email=user.email or "",
        email_verified=getattr(user, "email_confirmed_at", None) is not None,
    )


def _map_session(session: Any) -> SessionTokens:
    return SessionTokens(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        token_type=session.token_type or "bearer",
    )
