"""
Accounts module data models.

Request bodies use camelCase on the wire, matching the profile models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from modules.identity.models import SessionTokens
from modules.profiles.models import CamelModel, Profile, Role


class TokenPurpose(str, Enum):
    """What a verification token proves; the value is its collection."""

    EMAIL_VERIFICATION = "email_verifications"
    PASSWORD_RESET = "password_resets"


class VerificationToken(BaseModel):
    """
    A stored single-use token.

    Only the SHA-256 hash of the token is stored; the raw token exists
    only in the email sent to the user.
    """

    user_id: str
    email: str
    token_hash: str
    expires_at: datetime
    created_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class LoginResult(BaseModel):
    profile: Profile
    tokens: SessionTokens


# -----------------------------------------------------------------------------
# Request bodies
# -----------------------------------------------------------------------------


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    language: str = Field(default="en", min_length=2, max_length=10)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenRequest(CamelModel):
    token: str = Field(..., min_length=1)


class EmailRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class DeleteAccountRequest(CamelModel):
    password: str = Field(..., min_length=1)
    confirmation: str


class UpdateRoleRequest(CamelModel):
    role: Role
