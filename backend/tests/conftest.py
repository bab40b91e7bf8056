"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from modules.ratelimit.service import RateLimiter
from shared.config import Settings

from fakes import (
    TEST_JWT_SECRET,
    TEST_PASSWORD,
    FakeClock,
    FakeIdentityProvider,
    FakeMailTransport,
    FakeMonotonic,
    MemoryDocumentStore,
)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        supabase_jwt_secret=TEST_JWT_SECRET,
        frontend_url="https://app.example.com",
        log_level="WARNING",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def identity(settings) -> FakeIdentityProvider:
    return FakeIdentityProvider(settings)


@pytest.fixture
def mail() -> FakeMailTransport:
    return FakeMailTransport()


@pytest.fixture
def container(settings, store, identity, mail, clock, monotonic) -> ServiceContainer:
    return ServiceContainer(
        settings=settings,
        store=store,
        identity=identity,
        mail_transport=mail,
        rate_limiter=RateLimiter(clock=monotonic),
        clock=clock,
    )


@pytest.fixture
def client(settings, container):
    app = create_app(settings=settings, container=container)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def signup(client, mail):
    """Factory registering an account through the API, verified by default."""

    def _signup(
        email: str = "jane@example.com",
        password: str = TEST_PASSWORD,
        verified: bool = True,
    ) -> dict:
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": "Jane",
                "lastName": "Doe",
            },
        )
        assert response.status_code == 201, response.text
        user = response.json()["data"]["user"]
        if verified:
            response = client.post(
                "/api/auth/verify-email", json={"token": mail.last_token()}
            )
            assert response.status_code == 200, response.text
            user = response.json()["data"]["user"]
        return user

    return _signup
