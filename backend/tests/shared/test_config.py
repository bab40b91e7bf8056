"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import DEFAULT_RATE_LIMITS, RateLimitPolicy, Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "W.E.T Accounts API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.frontend_url == "http://localhost:3000"
        assert settings.supabase_jwt_audience == "authenticated"
        assert settings.external_timeout_seconds == 10.0

    def test_credential_lifecycle_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.verification_token_ttl_hours == 24
        assert settings.password_reset_token_ttl_hours == 1
        assert settings.min_password_length == 8
        assert settings.max_login_attempts == 5
        assert settings.lockout_duration_minutes == 120

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_supabase_config_from_env(self):
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "SUPABASE_JWT_SECRET": "test-jwt-secret",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.supabase_jwt_secret == "test-jwt-secret"


class TestRateLimits:
    def test_default_budgets(self):
        settings = Settings(_env_file=None)
        assert settings.rate_limit_for("login") == RateLimitPolicy(
            max_attempts=5, window_seconds=900
        )
        assert settings.rate_limit_for("forgot_password").max_attempts == 3
        assert settings.rate_limit_for("delete_account") == RateLimitPolicy(
            max_attempts=2, window_seconds=3600
        )

    def test_override_one_scope(self):
        """Overriding one scope should leave the others at their defaults."""
        settings = Settings(
            _env_file=None,
            rate_limits={"login": RateLimitPolicy(max_attempts=10, window_seconds=60)},
        )
        assert settings.rate_limit_for("login").max_attempts == 10
        assert settings.rate_limit_for("register") == DEFAULT_RATE_LIMITS["register"]


class TestGetSettings:
    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
