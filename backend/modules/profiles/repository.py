"""
Profile repository for document access.

Encapsulates all queries and data mapping for the ``user_profiles``
collection. Subscriptions are stored as flat columns so they can be
filtered; preferences are stored as one JSON document.
"""

import math
from datetime import datetime, timedelta
from typing import Any, Optional

from shared.document_store import Filter
from shared.repository import BaseRepository

from .interfaces import IProfileStore
from .models import (
    PAID_SUBSCRIPTIONS,
    Pagination,
    Preferences,
    PreferencesUpdate,
    Profile,
    ProfileUpdate,
    Role,
    StatsOverview,
    Subscription,
    SubscriptionType,
    UserPage,
    UserStats,
)
from .exceptions import ProfileNotFoundError

RECENT_USERS_WINDOW = timedelta(days=30)


class ProfileRepository(BaseRepository[Profile], IProfileStore):
    """
    Repository for profile data access.

    All methods return Pydantic models with proper mapping from documents.

    Note: This repository does NOT perform authorization checks.
    The service layer and the API gate are responsible for those.
    """

    collection = "user_profiles"

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def get(self, user_id: str) -> Optional[Profile]:
        doc = await self._store.get(self.collection, user_id)
        return self._map_to_profile(doc) if doc else None

    async def get_by_email(self, email: str) -> Optional[Profile]:
        result = await self._store.query(
            self.collection,
            [Filter("email", "eq", email.strip().lower())],
            limit=1,
        )
        return self._map_to_profile(result.rows[0]) if result.rows else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(
        self,
        user_id: str,
        email: str,
        first_name: str,
        last_name: str,
        language: str = "en",
    ) -> Profile:
        preferences = Preferences(language=language)
        doc = await self._store.create(
            self.collection,
            user_id,
            {
                "email": email.strip().lower(),
                "first_name": first_name,
                "last_name": last_name,
                "role": Role.USER.value,
                "email_verified": False,
                "subscription_type": SubscriptionType.FREE.value,
                "subscription_end_date": None,
                "preferences": preferences.model_dump(mode="json"),
                "login_attempts": 0,
                "lock_until": None,
                "last_login": None,
            },
        )
        return self._map_to_profile(doc)

    async def apply_update(self, profile: Profile, update: ProfileUpdate) -> Profile:
        changes: dict[str, Any] = {}
        if update.first_name is not None:
            changes["first_name"] = update.first_name
        if update.last_name is not None:
            changes["last_name"] = update.last_name
        if update.preferences is not None:
            merged = _merge_preferences(profile.preferences, update.preferences)
            changes["preferences"] = merged.model_dump(mode="json")
        return await self._update_or_raise(profile.id, changes)

    async def set_email_verified(self, user_id: str) -> Profile:
        return await self._update_or_raise(user_id, {"email_verified": True})

    async def set_role(self, user_id: str, role: Role) -> Profile:
        return await self._update_or_raise(user_id, {"role": role.value})

    async def record_failed_login(
        self,
        user_id: str,
        attempts: int,
        lock_until: Optional[datetime],
        expected_attempts: int,
    ) -> bool:
        doc = await self._store.update(
            self.collection,
            user_id,
            {"login_attempts": attempts, "lock_until": self._to_iso(lock_until)},
            [Filter("login_attempts", "eq", expected_attempts)],
        )
        return doc is not None

    async def clear_login_failures(
        self, user_id: str, last_login: Optional[datetime] = None
    ) -> None:
        changes: dict[str, Any] = {"login_attempts": 0, "lock_until": None}
        if last_login is not None:
            changes["last_login"] = last_login.isoformat()
        await self._store.update(self.collection, user_id, changes)

    async def delete(self, user_id: str) -> bool:
        return await self._store.delete(self.collection, user_id)

    # -------------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------------

    async def list_users(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        verified: Optional[bool] = None,
    ) -> UserPage:
        filters: list[Filter] = []
        if role is not None:
            filters.append(Filter("role", "eq", role.value))
        if verified is not None:
            filters.append(Filter("email_verified", "eq", verified))

        result = await self._store.query(
            self.collection,
            filters,
            search=search,
            search_fields=("first_name", "last_name", "email"),
            order_by="created_at",
            descending=True,
            limit=limit,
            offset=(page - 1) * limit,
        )

        total_pages = math.ceil(result.total / limit) if limit else 0
        return UserPage(
            users=[self._map_to_profile(doc) for doc in result.rows],
            pagination=Pagination(
                current_page=page,
                total_pages=total_pages,
                total_users=result.total,
                has_next_page=page < total_pages,
                has_prev_page=page > 1,
            ),
        )

    async def get_stats(self, now: datetime) -> UserStats:
        total = await self._store.count(self.collection)
        verified = await self._store.count(
            self.collection, [Filter("email_verified", "eq", True)]
        )
        premium = await self._store.count(
            self.collection,
            [Filter("subscription_type", "in", [t.value for t in PAID_SUBSCRIPTIONS])],
        )
        recent = await self._store.count(
            self.collection,
            [Filter("created_at", "gte", (now - RECENT_USERS_WINDOW).isoformat())],
        )
        roles = {
            role.value: await self._store.count(
                self.collection, [Filter("role", "eq", role.value)]
            )
            for role in Role
        }
        return UserStats(
            overview=StatsOverview(
                total_users=total,
                verified_users=verified,
                unverified_users=total - verified,
                premium_users=premium,
                recent_users=recent,
            ),
            role_distribution=roles,
        )

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    async def _update_or_raise(self, user_id: str, changes: dict[str, Any]) -> Profile:
        doc = await self._store.update(self.collection, user_id, changes)
        if doc is None:
            raise ProfileNotFoundError(user_id)
        return self._map_to_profile(doc)

    def _map_to_profile(self, doc: dict[str, Any]) -> Profile:
        """Map a stored document to a Profile."""
        return Profile(
            id=str(doc["id"]),
            email=doc["email"],
            first_name=doc.get("first_name") or "",
            last_name=doc.get("last_name") or "",
            role=Role(doc.get("role") or Role.USER.value),
            is_email_verified=bool(doc.get("email_verified", False)),
            subscription=Subscription(
                type=SubscriptionType(doc.get("subscription_type") or SubscriptionType.FREE.value),
                end_date=doc.get("subscription_end_date"),
            ),
            preferences=Preferences.model_validate(doc.get("preferences") or {}),
            last_login=doc.get("last_login"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
            login_attempts=doc.get("login_attempts") or 0,
            lock_until=doc.get("lock_until"),
        )


def _merge_preferences(current: Preferences, update: PreferencesUpdate) -> Preferences:
    """Merge allow-listed preference changes into the current preferences."""
    merged = current.model_dump()
    changes = update.model_dump(exclude_none=True)
    notifications = changes.pop("notifications", None)
    if notifications:
        merged["notifications"].update(notifications)
    merged.update(changes)
    return Preferences.model_validate(merged)
