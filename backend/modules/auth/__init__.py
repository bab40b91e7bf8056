"""
Authentication module.

Handles access-token validation and the access control gate applied
before protected operations.

Public API:
- IAuthService: Interface for auth operations
- AuthenticatedUser: Verified claims plus the user's profile
- Access rules: require_authenticated, require_email_verified,
  require_roles, require_active_subscription, require_admin, check_access
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import AuthenticatedUser
from .access import (
    AccessRule,
    check_access,
    require_active_subscription,
    require_admin,
    require_authenticated,
    require_email_verified,
    require_roles,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthenticationRequiredError,
    UserNotFoundError,
    EmailNotVerifiedError,
    InsufficientPermissionsError,
    PremiumRequiredError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthenticatedUser",
    # Access gate
    "AccessRule",
    "check_access",
    "require_active_subscription",
    "require_admin",
    "require_authenticated",
    "require_email_verified",
    "require_roles",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthenticationRequiredError",
    "UserNotFoundError",
    "EmailNotVerifiedError",
    "InsufficientPermissionsError",
    "PremiumRequiredError",
]
