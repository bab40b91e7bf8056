"""
Access control gate.

A rule is a plain callable that takes the (possibly absent) authenticated
user and raises when access must be denied. check_access() runs rules in
order; the first failure short-circuits and determines the response.

    check_access(user, require_email_verified, require_roles(Role.ADMIN))

Every rule other than require_authenticated also rejects an anonymous
caller with AuthenticationRequiredError, so rules can be used alone.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from modules.profiles.models import Role

from .models import AuthenticatedUser
from .exceptions import (
    AuthenticationRequiredError,
    EmailNotVerifiedError,
    InsufficientPermissionsError,
    PremiumRequiredError,
)

AccessRule = Callable[[Optional[AuthenticatedUser]], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_authenticated(user: Optional[AuthenticatedUser]) -> None:
    if user is None:
        raise AuthenticationRequiredError()


def require_email_verified(user: Optional[AuthenticatedUser]) -> None:
    require_authenticated(user)
    if not user.profile.is_email_verified:
        raise EmailNotVerifiedError()


def require_roles(*roles: Role) -> AccessRule:
    """
    Allow only users whose role is one of ``roles``.

    This is a membership test: ADMIN does not satisfy a PREMIUM-only rule.
    """
    allowed = frozenset(roles)

    def rule(user: Optional[AuthenticatedUser]) -> None:
        require_authenticated(user)
        if user.profile.role not in allowed:
            raise InsufficientPermissionsError(
                required_roles=sorted(r.value for r in allowed),
                user_role=user.profile.role.value,
            )

    return rule


def require_active_subscription(
    clock: Callable[[], datetime] = _utc_now,
) -> AccessRule:
    """
    Allow only premium or enterprise subscribers whose plan has not ended.

    A missing end date means the plan does not expire.
    """

    def rule(user: Optional[AuthenticatedUser]) -> None:
        require_authenticated(user)
        if not user.profile.has_active_subscription(clock()):
            raise PremiumRequiredError()

    return rule


require_admin = require_roles(Role.ADMIN)


def check_access(user: Optional[AuthenticatedUser], *rules: AccessRule) -> None:
    """Evaluate rules in order; the first failing rule raises."""
    for rule in rules:
        rule(user)
