import pytest

from modules.auth.models import AuthenticatedUser
from modules.identity.models import TokenClaims
from modules.profiles.models import Profile, Role


def _user(**profile_overrides) -> AuthenticatedUser:
    profile = Profile(
        id="user-123",
        email="test@example.com",
        first_name="Test",
        last_name="User",
        **profile_overrides,
    )
    claims = TokenClaims(sub="user-123", email="test@example.com", exp=2, iat=1)
    return AuthenticatedUser(id="user-123", profile=profile, claims=claims, access_token="tok")


class TestAuthenticatedUser:
    def test_exposes_profile_fields(self):
        user = _user(role=Role.PREMIUM, is_email_verified=True)
        assert user.email == "test@example.com"
        assert user.role == Role.PREMIUM
        assert user.email_verified is True

    def test_user_is_immutable(self):
        """AuthenticatedUser should be immutable."""
        user = _user()
        with pytest.raises(Exception):  # Pydantic ValidationError
            user.id = "different-id"

    def test_access_token_not_serialized(self):
        user = _user()
        assert "access_token" not in user.model_dump()
        assert "tok" not in repr(user)
