"""
User-related endpoints.

Provides endpoints for user profile and account management.
"""

from fastapi import APIRouter, Depends

from modules.accounts.interfaces import IAccountService
from modules.accounts.models import ChangePasswordRequest, DeleteAccountRequest
from modules.auth import (
    AuthenticatedUser,
    require_active_subscription,
    require_email_verified,
)
from modules.profiles.models import ProfileUpdate

from ..dependencies import get_account_service
from ..middleware.auth import RequireAccess, get_current_user
from ..middleware.rate_limit import RateLimit
from ..models.responses import ApiResponse, ok

router = APIRouter()


@router.get("/profile", response_model=ApiResponse)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> ApiResponse:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return ok("Profile retrieved successfully", {"user": user.profile})


@router.put("/profile", response_model=ApiResponse)
async def update_profile(
    update: ProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    """
    Update names and preferences.

    Only firstName, lastName and preferences may be changed here; any
    other key is rejected.
    """
    profile = await service.update_profile(user, update)
    return ok("Profile updated successfully", {"user": profile})


@router.put(
    "/change-password",
    response_model=ApiResponse,
    dependencies=[Depends(RateLimit("change_password"))],
)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    await service.change_password(user, request.current_password, request.new_password)
    return ok("Password changed successfully")


@router.delete(
    "/account",
    response_model=ApiResponse,
    dependencies=[Depends(RateLimit("delete_account"))],
)
async def delete_account(
    request: DeleteAccountRequest,
    user: AuthenticatedUser = Depends(RequireAccess(require_email_verified)),
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    """
    Permanently delete the current user's account.

    Requires a verified email, the current password and the literal
    confirmation "DELETE".
    """
    await service.delete_account(user, request.password, request.confirmation)
    return ok("Account deleted successfully")


@router.get("/premium", response_model=ApiResponse)
async def premium_content(
    user: AuthenticatedUser = Depends(
        RequireAccess(require_email_verified, require_active_subscription())
    ),
) -> ApiResponse:
    """Content available to verified users with an active paid plan."""
    return ok(
        "Premium content retrieved successfully",
        {
            "subscription": user.profile.subscription,
            "features": ["advanced-analytics", "priority-support", "early-access"],
        },
    )
