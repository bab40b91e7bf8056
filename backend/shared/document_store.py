"""
Document store adapter.

Repositories talk to IDocumentStore rather than to the Supabase query
builder, so the narrow get/put/update/delete/query contract is the only
thing they depend on. SupabaseDocumentStore implements it on PostgREST
tables keyed by an ``id`` column.

Every write stamps ``updated_at``; creation stamps ``created_at``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from supabase import Client

from .external import call_external

Document = dict[str, Any]

FILTER_OPERATORS = ("eq", "neq", "in", "gt", "gte", "lt", "lte")


@dataclass(frozen=True)
class Filter:
    """A single field predicate, e.g. Filter("role", "eq", "admin")."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass
class QueryResult:
    """Rows for one page of a query plus the total number of matches."""

    rows: list[Document] = field(default_factory=list)
    total: int = 0


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@runtime_checkable
class IDocumentStore(Protocol):
    """Contract for the persisted-document collaborator."""

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Get a document by id, or None."""
        ...

    async def create(self, collection: str, doc_id: str, fields: Document) -> Document:
        """Insert a new document; stamps created_at and updated_at."""
        ...

    async def put(self, collection: str, doc_id: str, fields: Document) -> Document:
        """Insert or replace a document; stamps created_at and updated_at."""
        ...

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Document,
        filters: Sequence[Filter] = (),
    ) -> Optional[Document]:
        """
        Update fields of a document; stamps updated_at.

        With filters this is a compare-and-set: the row is only changed if
        every filter still matches. Returns None when no row was changed.
        """
        ...

    async def delete(
        self,
        collection: str,
        doc_id: str,
        filters: Sequence[Filter] = (),
    ) -> bool:
        """
        Delete a document, optionally only when every filter also matches.

        Returns True only if this call removed a row.
        """
        ...

    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        *,
        search: Optional[str] = None,
        search_fields: Sequence[str] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> QueryResult:
        """Query documents matching all filters (and the search term, if any)."""
        ...

    async def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        """Count documents matching all filters."""
        ...

    async def health_check(self) -> bool:
        """Return True if the store is reachable."""
        ...


class SupabaseDocumentStore:
    """
    IDocumentStore backed by Supabase (PostgREST) tables.

    Each call is run through call_external() so it is bounded by the
    configured timeout and upstream failures surface as ExternalServiceError.
    """

    SERVICE_NAME = "supabase_db"

    def __init__(self, db: Client, timeout: float = 10.0, health_table: str = "user_profiles"):
        self._db = db
        self._timeout = timeout
        self._health_table = health_table

    async def _run(self, operation: str, func, *args):
        return await call_external(
            self.SERVICE_NAME, operation, func, *args, timeout=self._timeout
        )

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        def _get():
            result = self._db.table(collection).select("*").eq("id", doc_id).execute()
            return result.data[0] if result.data else None

        return await self._run(f"get:{collection}", _get)

    async def create(self, collection: str, doc_id: str, fields: Document) -> Document:
        now = utc_now_iso()
        row = {**fields, "id": doc_id, "created_at": now, "updated_at": now}

        def _insert():
            result = self._db.table(collection).insert(row).execute()
            return result.data[0] if result.data else row

        return await self._run(f"create:{collection}", _insert)

    async def put(self, collection: str, doc_id: str, fields: Document) -> Document:
        now = utc_now_iso()
        row = {**fields, "id": doc_id, "created_at": now, "updated_at": now}

        def _upsert():
            result = self._db.table(collection).upsert(row).execute()
            return result.data[0] if result.data else row

        return await self._run(f"put:{collection}", _upsert)

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Document,
        filters: Sequence[Filter] = (),
    ) -> Optional[Document]:
        changes = {**fields, "updated_at": utc_now_iso()}

        def _update():
            query = self._db.table(collection).update(changes).eq("id", doc_id)
            result = self._apply_filters(query, filters).execute()
            return result.data[0] if result.data else None

        return await self._run(f"update:{collection}", _update)

    async def delete(
        self,
        collection: str,
        doc_id: str,
        filters: Sequence[Filter] = (),
    ) -> bool:
        def _delete():
            query = self._db.table(collection).delete().eq("id", doc_id)
            query = self._apply_filters(query, filters)
            result = query.execute()
            return bool(result.data)

        return await self._run(f"delete:{collection}", _delete)

    async def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        *,
        search: Optional[str] = None,
        search_fields: Sequence[str] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> QueryResult:
        def _query():
            query = self._db.table(collection).select("*", count="exact")
            query = self._apply_filters(query, filters)
            if search and search_fields:
                term = _escape_search(search)
                query = query.or_(",".join(f"{f}.ilike.*{term}*" for f in search_fields))
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit is not None:
                query = query.range(offset, offset + limit - 1)
            result = query.execute()
            return QueryResult(rows=list(result.data or []), total=result.count or 0)

        return await self._run(f"query:{collection}", _query)

    async def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        def _count():
            query = self._db.table(collection).select("id", count="exact")
            query = self._apply_filters(query, filters)
            result = query.execute()
            return result.count or 0

        return await self._run(f"count:{collection}", _count)

    async def health_check(self) -> bool:
        def _ping():
            self._db.table(self._health_table).select("id").limit(1).execute()
            return True

        return await self._run("health_check", _ping)

    @staticmethod
    def _apply_filters(query, filters: Sequence[Filter]):
        for f in filters:
            if f.op == "in":
                query = query.in_(f.field, list(f.value))
            else:
                query = getattr(query, f.op)(f.field, f.value)
        return query


def _escape_search(term: str) -> str:
    # PostgREST or_() uses commas and parentheses as separators
    return "".join(ch for ch in term if ch not in ",()*").strip()
