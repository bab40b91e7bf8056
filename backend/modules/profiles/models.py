"""
Profiles module data models.

Profiles are serialized with camelCase field names (``isEmailVerified``,
``firstName``) because that is the shape clients consume. Lockout state
is excluded from serialization.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Role(str, Enum):
    """User roles. Checks are set membership, not a hierarchy."""

    USER = "user"
    PREMIUM = "premium"
    ADMIN = "admin"


class SubscriptionType(str, Enum):
    """Subscription plans."""

    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


PAID_SUBSCRIPTIONS = (SubscriptionType.PREMIUM, SubscriptionType.ENTERPRISE)


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


class Subscription(CamelModel):
    """A user's plan. A null end date means the plan does not expire."""

    type: SubscriptionType = SubscriptionType.FREE
    end_date: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        """True for a paid plan whose end date is absent or in the future."""
        if self.type not in PAID_SUBSCRIPTIONS:
            return False
        return self.end_date is None or self.end_date > now


class NotificationPreferences(CamelModel):
    email: bool = True
    updates: bool = True


class Preferences(CamelModel):
    theme: Theme = Theme.DARK
    language: str = "en"
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)


class Profile(CamelModel):
    """
    Full user profile, keyed by the identity ID.

    Exactly one profile exists per identity. The role defaults to ``user``
    and is only changed by an admin.
    """

    id: str = Field(..., description="Identity ID (UUID)")
    email: str = Field(..., description="Lower-cased email address")
    first_name: str
    last_name: str
    role: Role = Role.USER
    is_email_verified: bool = False
    subscription: Subscription = Field(default_factory=Subscription)
    preferences: Preferences = Field(default_factory=Preferences)
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Persisted lockout state, never serialized to clients
    login_attempts: int = Field(default=0, exclude=True)
    lock_until: Optional[datetime] = Field(default=None, exclude=True)

    @computed_field(alias="fullName")
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_active_subscription(self, now: datetime) -> bool:
        return self.subscription.is_active(now)

    def is_locked(self, now: datetime) -> bool:
        return self.lock_until is not None and self.lock_until > now


def _strip_required(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty")
    return value


class NotificationPreferencesUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    email: Optional[bool] = None
    updates: Optional[bool] = None


class PreferencesUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    theme: Optional[Theme] = None
    language: Optional[str] = Field(None, min_length=2, max_length=10)
    notifications: Optional[NotificationPreferencesUpdate] = None


class ProfileUpdate(CamelModel):
    """
    Allow-listed profile changes.

    Unknown keys are rejected rather than merged or dropped.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    preferences: Optional[PreferencesUpdate] = None

    @field_validator("first_name")
    @classmethod
    def _first_name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _strip_required(v, "First name")

    @field_validator("last_name")
    @classmethod
    def _last_name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _strip_required(v, "Last name")

    def is_empty(self) -> bool:
        """True when no field, at any depth, carries a value."""

        def _has_value(node: Any) -> bool:
            if isinstance(node, dict):
                return any(_has_value(v) for v in node.values())
            return node is not None

        return not _has_value(self.model_dump())


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_users: int
    has_next_page: bool
    has_prev_page: bool


class UserPage(CamelModel):
    """One page of the admin user listing, newest first."""

    users: list[Profile]
    pagination: Pagination


class StatsOverview(CamelModel):
    total_users: int
    verified_users: int
    unverified_users: int
    premium_users: int
    recent_users: int


class UserStats(CamelModel):
    overview: StatsOverview
    role_distribution: dict[str, int]
