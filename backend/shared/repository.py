"""
Base repository class for document access.

Provides a common abstraction layer for all repositories, encapsulating
document store access and providing shared utilities for data operations.
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from .document_store import IDocumentStore


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for document operations:
    - Document store access via self._store
    - The collection the repository owns via self.collection
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            collection = "user_profiles"

            async def get(self, user_id: str) -> Optional[Profile]:
                doc = await self._store.get(self.collection, user_id)
                return self._map_to_profile(doc) if doc else None
    """

    collection: str = ""

    def __init__(self, store: IDocumentStore) -> None:
        """
        Initialize the repository with a document store.

        Args:
            store: Document store used for all reads and writes.
        """
        self._store = store

    @staticmethod
    def _to_iso(value: Optional[datetime]) -> Optional[str]:
        """Serialize an optional datetime for storage."""
        return value.isoformat() if value is not None else None
