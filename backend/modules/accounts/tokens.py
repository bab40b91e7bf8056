"""
Verification token repository.

One outstanding token per account and purpose: the document ID is the
user ID, so issuing a new token replaces the previous one
(last-write-wins). Consumption is a conditional delete on the user ID and
token hash, so only one caller can ever consume a given token.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Any, Optional

from shared.document_store import Filter, IDocumentStore
from shared.repository import BaseRepository

from .models import TokenPurpose, VerificationToken


def generate_token() -> str:
    """A 64-character hex token from 32 random bytes."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class VerificationTokenRepository(BaseRepository[VerificationToken]):
    """Repository for email-verification or password-reset tokens."""

    def __init__(self, store: IDocumentStore, purpose: TokenPurpose):
        super().__init__(store)
        self.purpose = purpose
        self.collection = purpose.value

    async def issue(
        self, user_id: str, email: str, ttl: timedelta, now: datetime
    ) -> str:
        """
        Create a token for a user, replacing any previous one.

        Returns:
            The raw token, to be sent to the user
        """
        token = generate_token()
        await self._store.put(
            self.collection,
            user_id,
            {
                "email": email,
                "token_hash": hash_token(token),
                "expires_at": (now + ttl).isoformat(),
            },
        )
        return token

    async def find(self, token: str) -> Optional[VerificationToken]:
        """Look up a token by its value, whether or not it has expired."""
        result = await self._store.query(
            self.collection,
            [Filter("token_hash", "eq", hash_token(token))],
            limit=1,
        )
        return self._map_to_token(result.rows[0]) if result.rows else None

    async def consume(self, record: VerificationToken) -> bool:
        """
        Delete the token if it is still the current one.

        Returns:
            True only for the caller that actually removed it
        """
        return await self._store.delete(
            self.collection,
            record.user_id,
            [Filter("token_hash", "eq", record.token_hash)],
        )

    async def restore(self, record: VerificationToken) -> None:
        """
        Put back a consumed token after the step it guarded failed.

        Inserts rather than upserts, so a token issued in the meantime is
        never overwritten; in that case the store raises.
        """
        await self._store.create(
            self.collection,
            record.user_id,
            {
                "email": record.email,
                "token_hash": record.token_hash,
                "expires_at": record.expires_at.isoformat(),
            },
        )

    async def revoke(self, user_id: str) -> bool:
        """Delete whatever token a user has outstanding."""
        return await self._store.delete(self.collection, user_id)

    def _map_to_token(self, doc: dict[str, Any]) -> VerificationToken:
        return VerificationToken(
            user_id=str(doc["id"]),
            email=doc["email"],
            token_hash=doc["token_hash"],
            expires_at=doc["expires_at"],
            created_at=doc.get("created_at"),
        )
