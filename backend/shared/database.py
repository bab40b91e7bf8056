"""
Client factory for Supabase.

Provides both service-role clients (for admin auth operations and table
access bypassing RLS) and anon-key clients (for password sign-in and
session refresh on behalf of a user).

Clients are created by the process entry point and handed to the
services that need them; nothing here is cached at module level.
"""

from supabase import create_client, Client

from .config import Settings


def create_service_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the service role (bypasses RLS).

    Use this for backend operations that need full database access and
    for the auth admin API (creating, updating and deleting identities).

    Returns:
        Supabase client configured with service role key
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )


def create_anon_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the anon key.

    Use this for operations performed as the end user, such as signing in
    with a password or exchanging a refresh token. A fresh client per call
    keeps one user's session from leaking into another's.

    Returns:
        Supabase client configured with the anon key
    """
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )
