"""
Identity module data models.

These models describe what the core sees of the external identity
provider: the account reference, decoded token claims and session tokens.
The credential hash never leaves the provider.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """An externally managed account reference."""

    id: str = Field(..., description="Provider user ID (UUID)")
    email: str = Field(..., description="Account email")
    email_verified: bool = Field(default=False, description="Provider-side confirmation flag")

    model_config = {"frozen": True}


class TokenClaims(BaseModel):
    """
    Decoded access-token claims.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: Union[str, list[str]] = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Provider role claim")
    email_confirmed_at: Optional[str] = Field(None, description="Provider confirmation time")

    model_config = {"extra": "ignore"}


class SessionTokens(BaseModel):
    """A short-lived access token plus the long-lived refresh token."""

    access_token: str
    refresh_token: str
    expires_in: Optional[int] = Field(None, description="Access token lifetime in seconds")
    token_type: str = "bearer"
