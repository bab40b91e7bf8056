"""
Centralized configuration for the W.E.T Accounts backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., SUPABASE_*, SMTP_*).
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitPolicy(BaseModel):
    """Attempt budget for one class of sensitive operation."""

    max_attempts: int = Field(..., description="Attempts allowed per window")
    window_seconds: int = Field(..., description="Window duration in seconds")

    model_config = {"frozen": True}


FIFTEEN_MINUTES = 15 * 60

DEFAULT_RATE_LIMITS: dict[str, RateLimitPolicy] = {
    "register": RateLimitPolicy(max_attempts=5, window_seconds=FIFTEEN_MINUTES),
    "login": RateLimitPolicy(max_attempts=5, window_seconds=FIFTEEN_MINUTES),
    "resend_verification": RateLimitPolicy(max_attempts=3, window_seconds=FIFTEEN_MINUTES),
    "forgot_password": RateLimitPolicy(max_attempts=3, window_seconds=FIFTEEN_MINUTES),
    "reset_password": RateLimitPolicy(max_attempts=5, window_seconds=FIFTEEN_MINUTES),
    "change_password": RateLimitPolicy(max_attempts=3, window_seconds=FIFTEEN_MINUTES),
    # Very strict limit for account deletion
    "delete_account": RateLimitPolicy(max_attempts=2, window_seconds=60 * 60),
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "W.E.T Accounts API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (identity provider + document store)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"

    # Outbound mail
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    email_from: Optional[str] = None
    email_from_name: str = "W.E.T Team"

    # Frontend URLs (for links in emails)
    frontend_url: str = "http://localhost:3000"

    # Every call to Supabase or SMTP is bounded by this timeout
    external_timeout_seconds: float = 10.0

    # Credential lifecycle
    verification_token_ttl_hours: int = 24
    password_reset_token_ttl_hours: int = 1
    min_password_length: int = 8
    max_login_attempts: int = 5
    lockout_duration_minutes: int = 120

    # Rate limiting (per client address + identity)
    rate_limits: dict[str, RateLimitPolicy] = Field(
        default_factory=lambda: dict(DEFAULT_RATE_LIMITS)
    )

    def rate_limit_for(self, scope: str) -> RateLimitPolicy:
        """Budget for a scope, falling back to the built-in default."""
        return self.rate_limits.get(scope) or DEFAULT_RATE_LIMITS[scope]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
