"""
Rate limit dependency for sensitive routes.

The key combines the operation, the client address and, when the request
carries a valid bearer token, the caller's identity. Only the token's
claims are read; no profile lookup happens here.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials

from modules.ratelimit import build_rate_limit_key
from shared.exceptions import AuthenticationError

from ..dependencies import ServiceContainer, get_container
from .auth import bearer_scheme


class RateLimit:
    """
    Count one attempt at ``scope`` and reject the request once the budget
    configured for it is spent.

    Usage:
        @router.post("/login", dependencies=[Depends(RateLimit("login"))])
    """

    def __init__(self, scope: str):
        self.scope = scope

    async def __call__(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        container: ServiceContainer = Depends(get_container),
    ) -> None:
        identity_id = None
        if credentials is not None:
            try:
                identity_id = container.identity.verify_token(credentials.credentials).sub
            except AuthenticationError:
                identity_id = None

        client_address = request.client.host if request.client else None
        policy = container.settings.rate_limit_for(self.scope)
        key = build_rate_limit_key(self.scope, client_address, identity_id)
        await container.rate_limiter.hit(key, policy.max_attempts, policy.window_seconds)
