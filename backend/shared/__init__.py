"""
Shared infrastructure for the accounts backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- document_store: Document store contract and Supabase implementation
- external: Timeout-bounded calls to external services
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, RateLimitPolicy, get_settings
from .database import create_service_client, create_anon_client
from .document_store import IDocumentStore, SupabaseDocumentStore, Filter, QueryResult
from .external import call_external
from .exceptions import (
    AccountsError,
    ValidationError,
    ConflictError,
    NotFoundError,
    AuthenticationError,
    AuthorizationError,
    TooManyAttemptsError,
    AccountLockedError,
    ExternalServiceError,
    InconsistentStateError,
)

__all__ = [
    "Settings",
    "RateLimitPolicy",
    "get_settings",
    "create_service_client",
    "create_anon_client",
    "IDocumentStore",
    "SupabaseDocumentStore",
    "Filter",
    "QueryResult",
    "call_external",
    "AccountsError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "AuthenticationError",
    "AuthorizationError",
    "TooManyAttemptsError",
    "AccountLockedError",
    "ExternalServiceError",
    "InconsistentStateError",
]
