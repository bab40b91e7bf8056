"""
Profiles module.

Locally owned metadata about an identity: names, role, subscription,
preferences and login-lockout state, persisted in the document store.

Public API:
- IProfileStore: Interface for profile persistence
- Profile, Role, Subscription, Preferences: Profile models
- ProfileUpdate: Allow-listed profile changes
- Profile exceptions: ProfileNotFoundError
"""

from .interfaces import IProfileStore
from .models import (
    Role,
    SubscriptionType,
    Theme,
    Subscription,
    NotificationPreferences,
    Preferences,
    Profile,
    ProfileUpdate,
    PreferencesUpdate,
    NotificationPreferencesUpdate,
    Pagination,
    UserPage,
    StatsOverview,
    UserStats,
)
from .exceptions import ProfileNotFoundError

__all__ = [
    # Interface
    "IProfileStore",
    # Models
    "Role",
    "SubscriptionType",
    "Theme",
    "Subscription",
    "NotificationPreferences",
    "Preferences",
    "Profile",
    "ProfileUpdate",
    "PreferencesUpdate",
    "NotificationPreferencesUpdate",
    "Pagination",
    "UserPage",
    "StatsOverview",
    "UserStats",
    # Exceptions
    "ProfileNotFoundError",
]
