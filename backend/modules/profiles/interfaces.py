"""
Profiles module interface.

Other modules should depend on IProfileStore, not the concrete repository.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import Profile, ProfileUpdate, Role, UserPage, UserStats


@runtime_checkable
class IProfileStore(Protocol):
    """
    Interface for profile persistence.

    Lookups are by identity ID or, as a secondary key, by email.
    """

    async def get(self, user_id: str) -> Optional[Profile]:
        """Get a profile by identity ID."""
        ...

    async def get_by_email(self, email: str) -> Optional[Profile]:
        """Get a profile by email (case-insensitive)."""
        ...

    async def create(
        self,
        user_id: str,
        email: str,
        first_name: str,
        last_name: str,
        language: str = "en",
    ) -> Profile:
        """Create the profile for a new identity with default role and preferences."""
        ...

    async def apply_update(self, profile: Profile, update: ProfileUpdate) -> Profile:
        """
        Apply allow-listed changes to a profile.

        Raises:
            ProfileNotFoundError: If the profile disappeared meanwhile
        """
        ...

    async def set_email_verified(self, user_id: str) -> Profile:
        """Flip the verified flag. Raises ProfileNotFoundError if missing."""
        ...

    async def set_role(self, user_id: str, role: Role) -> Profile:
        """Change a user's role. Raises ProfileNotFoundError if missing."""
        ...

    async def record_failed_login(
        self,
        user_id: str,
        attempts: int,
        lock_until: Optional[datetime],
        expected_attempts: int,
    ) -> bool:
        """
        Persist the failed-login counter and lock expiry, but only if the
        stored counter still equals ``expected_attempts``.

        Returns False when another request changed the counter first.
        """
        ...

    async def clear_login_failures(
        self, user_id: str, last_login: Optional[datetime] = None
    ) -> None:
        """Reset lockout state, optionally stamping the last login time."""
        ...

    async def delete(self, user_id: str) -> bool:
        """Delete a profile. Returns True if one was removed."""
        ...

    async def list_users(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        verified: Optional[bool] = None,
    ) -> UserPage:
        """List profiles for administration, newest first."""
        ...

    async def get_stats(self, now: datetime) -> UserStats:
        """Aggregate counts for the admin dashboard."""
        ...
