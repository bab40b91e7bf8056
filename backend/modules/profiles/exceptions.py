"""
Profiles module exceptions.
"""

from shared.exceptions import NotFoundError


class ProfileNotFoundError(NotFoundError):
    """Raised when no profile exists for a user ID."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
