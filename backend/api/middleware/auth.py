"""
Authentication dependencies.

Reads the bearer token, validates it through the auth service and applies
access rules before the handler runs.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.auth import AccessRule, AuthenticatedUser, IAuthService, check_access

from ..dependencies import get_auth_service

# Bearer token extractor; a missing header or another scheme yields None
bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return await auth.validate_token(_token(credentials))


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    return await auth.validate_optional_token(_token(credentials))


class RequireAccess:
    """
    Dependency that authenticates the caller and applies access rules.

    Usage:
        @router.get("/premium")
        async def premium(user = Depends(RequireAccess(require_email_verified))):
            ...
    """

    def __init__(self, *rules: AccessRule):
        self.rules = rules

    async def __call__(
        self, user: AuthenticatedUser = Depends(get_current_user)
    ) -> AuthenticatedUser:
        check_access(user, *self.rules)
        return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
