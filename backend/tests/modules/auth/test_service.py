import pytest
from unittest.mock import AsyncMock

from fakes import FakeIdentityProvider, MemoryDocumentStore, create_test_token
from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from modules.auth.service import AuthService
from modules.profiles.repository import ProfileRepository
from shared.exceptions import ExternalServiceError


class TestAuthService:
    @pytest.fixture
    def profiles(self):
        return ProfileRepository(MemoryDocumentStore())

    @pytest.fixture
    def service(self, settings, profiles):
        """Create auth service with in-memory collaborators."""
        return AuthService(FakeIdentityProvider(settings), profiles)

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service, profiles):
        """Should validate a valid token and return user with profile."""
        await profiles.create("user-123", "test@example.com", "Test", "User")

        user = await service.validate_token(create_test_token("user-123"))

        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.profile.first_name == "Test"
        assert user.claims.sub == "user-123"

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(create_test_token(expired=True))

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token("invalid.token.here")

    @pytest.mark.asyncio
    async def test_valid_token_without_profile(self, service):
        """A verified identity with no profile is rejected, not auto-created."""
        with pytest.raises(UserNotFoundError) as exc_info:
            await service.validate_token(create_test_token("ghost"))
        assert exc_info.value.code == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_optional_token_absent_or_invalid(self, service):
        assert await service.validate_optional_token(None) is None
        assert await service.validate_optional_token("garbage") is None
        assert await service.validate_optional_token(create_test_token(expired=True)) is None
        assert await service.validate_optional_token(create_test_token("ghost")) is None

    @pytest.mark.asyncio
    async def test_optional_token_still_surfaces_outages(self, settings):
        """Upstream failures are not authentication failures."""
        profiles = AsyncMock()
        profiles.get.side_effect = ExternalServiceError("down", service="supabase_db")
        service = AuthService(FakeIdentityProvider(settings), profiles)

        with pytest.raises(ExternalServiceError):
            await service.validate_optional_token(create_test_token("user-123"))

    @pytest.mark.asyncio
    async def test_get_user_by_email_case_insensitive(self, service, profiles):
        await profiles.create("user-123", "test@example.com", "Test", "User")

        profile = await service.get_user_by_email("TEST@example.com")

        assert profile.id == "user-123"
        assert await service.get_user_by_id("missing") is None
