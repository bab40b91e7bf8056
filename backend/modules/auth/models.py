"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional

from pydantic import BaseModel, Field

from modules.identity.models import TokenClaims
from modules.profiles.models import Profile, Role


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Built from verified token claims plus the user's profile, and made
    available to route handlers via dependency injection. The raw access
    token is kept so logout can revoke the provider session.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    profile: Profile = Field(..., description="The user's profile")
    claims: TokenClaims = Field(..., description="Verified token claims")
    access_token: Optional[str] = Field(None, repr=False, exclude=True)

    model_config = {"frozen": True}  # Make immutable for safety

    @property
    def email(self) -> str:
        return self.profile.email

    @property
    def role(self) -> Role:
        return self.profile.role

    @property
    def email_verified(self) -> bool:
        return self.profile.is_email_verified
