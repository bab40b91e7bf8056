"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

There is no module-level container: the app lifespan builds one and keeps
it on ``app.state``, and tests build one from fakes and pass it to
create_app().
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Request

from modules.accounts.interfaces import IAccountService
from modules.accounts.models import TokenPurpose
from modules.accounts.service import AccountService
from modules.accounts.tokens import VerificationTokenRepository
from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService
from modules.identity.interfaces import IIdentityProvider
from modules.identity.service import SupabaseIdentityProvider
from modules.notifications.interfaces import IMailTransport
from modules.notifications.service import NotificationService
from modules.notifications.transport import SmtpMailTransport
from modules.profiles.repository import ProfileRepository
from modules.ratelimit.service import RateLimiter
from shared.config import Settings
from shared.database import create_anon_client, create_service_client
from shared.document_store import IDocumentStore, SupabaseDocumentStore
from shared.exceptions import AccountsError

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    Takes the three external collaborators (document store, identity
    provider, mail transport) and builds everything else on top of them.
    """

    def __init__(
        self,
        settings: Settings,
        store: IDocumentStore,
        identity: IIdentityProvider,
        mail_transport: IMailTransport,
        rate_limiter: Optional[RateLimiter] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.identity = identity
        self.mail_transport = mail_transport
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()

        self.profiles = ProfileRepository(store)
        self.verification_tokens = VerificationTokenRepository(
            store, TokenPurpose.EMAIL_VERIFICATION
        )
        self.reset_tokens = VerificationTokenRepository(store, TokenPurpose.PASSWORD_RESET)
        self.notifications = NotificationService(mail_transport, settings)

        self.auth: IAuthService = AuthService(identity, self.profiles)
        account_kwargs = {"clock": clock} if clock is not None else {}
        self.accounts: IAccountService = AccountService(
            identity=identity,
            profiles=self.profiles,
            notifications=self.notifications,
            verification_tokens=self.verification_tokens,
            reset_tokens=self.reset_tokens,
            settings=settings,
            **account_kwargs,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """Build the production container on Supabase and SMTP."""
        service_client = create_service_client(settings)
        return cls(
            settings=settings,
            store=SupabaseDocumentStore(
                service_client, timeout=settings.external_timeout_seconds
            ),
            identity=SupabaseIdentityProvider(
                service_client,
                settings,
                anon_client_factory=lambda: create_anon_client(settings),
            ),
            mail_transport=SmtpMailTransport.from_settings(settings),
        )

    async def health_check(self) -> dict[str, str]:
        """
        Check every external dependency.

        Returns:
            Mapping of dependency name to "ok" or "unavailable"
        """
        checks = {
            "database": self.store,
            "identity": self.identity,
            "mail": self.mail_transport,
        }
        results: dict[str, str] = {}
        for name, component in checks.items():
            try:
                healthy = await component.health_check()
            except AccountsError as e:
                logger.warning(f"Health check failed for {name}: {e.message}")
                healthy = False
            results[name] = "ok" if healthy else "unavailable"
        return results

    async def close(self) -> None:
        """Release in-process state at shutdown."""
        await self.rate_limiter.clear()
        logger.info("Service container closed")


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the app's service container."""
    return request.app.state.container


def get_auth_service(
    container: ServiceContainer = Depends(get_container),
) -> IAuthService:
    """FastAPI dependency for auth service."""
    return container.auth


def get_account_service(
    container: ServiceContainer = Depends(get_container),
) -> IAccountService:
    """FastAPI dependency for account service."""
    return container.accounts
