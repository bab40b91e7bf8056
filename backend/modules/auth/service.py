"""
Authentication service implementation.

Verifies Supabase access tokens and resolves the caller's profile.
"""

import logging
from typing import Optional

from modules.identity.interfaces import IIdentityProvider
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import Profile
from shared.exceptions import AuthenticationError

from .interfaces import IAuthService
from .models import AuthenticatedUser
from .exceptions import MissingTokenError, UserNotFoundError

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Token signatures are checked by the identity provider; profiles come
    from the profile store. Nothing is written here.
    """

    def __init__(self, identity: IIdentityProvider, profiles: IProfileStore):
        self._identity = identity
        self._profiles = profiles

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate an access token and return the authenticated user.

        A profile missing for a valid identity is reported as
        UserNotFoundError rather than created on the fly.
        """
        if not token:
            raise MissingTokenError()

        claims = self._identity.verify_token(token)

        profile = await self._profiles.get(claims.sub)
        if profile is None:
            logger.warning(f"Valid token for user {claims.sub} without a profile")
            raise UserNotFoundError(claims.sub)

        return AuthenticatedUser(
            id=claims.sub,
            profile=profile,
            claims=claims,
            access_token=token,
        )

    async def validate_optional_token(
        self, token: Optional[str]
    ) -> Optional[AuthenticatedUser]:
        if not token:
            return None
        try:
            return await self.validate_token(token)
        except AuthenticationError as e:
            logger.debug(f"Ignoring optional token: {e.code}")
            return None

    async def get_user_by_id(self, user_id: str) -> Optional[Profile]:
        return await self._profiles.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[Profile]:
        return await self._profiles.get_by_email(email)
