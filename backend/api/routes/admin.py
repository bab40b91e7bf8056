"""
Administration endpoints.

Every route here requires the admin role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from modules.accounts.interfaces import IAccountService
from modules.accounts.models import UpdateRoleRequest
from modules.auth import AuthenticatedUser, require_admin
from modules.profiles.models import Role

from ..dependencies import get_account_service
from ..middleware.auth import RequireAccess
from ..models.responses import ApiResponse, ok

router = APIRouter()

RequireAdmin = Depends(RequireAccess(require_admin))


@router.get("/users", response_model=ApiResponse)
async def list_users(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(default=None, max_length=100),
    role: Optional[Role] = Query(default=None),
    verified: Optional[bool] = Query(default=None, alias="isEmailVerified"),
    admin: AuthenticatedUser = RequireAdmin,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    """List users, newest first, with search and filters."""
    result = await service.list_users(
        page=page, limit=limit, search=search, role=role, verified=verified
    )
    return ok("Users retrieved successfully", result.model_dump(by_alias=True))


@router.put("/users/{user_id}/role", response_model=ApiResponse)
async def update_user_role(
    user_id: str,
    request: UpdateRoleRequest,
    admin: AuthenticatedUser = RequireAdmin,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    profile = await service.update_role(admin, user_id, request.role)
    return ok("User role updated successfully", {"user": profile})


@router.get("/stats", response_model=ApiResponse)
async def get_stats(
    admin: AuthenticatedUser = RequireAdmin,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    stats = await service.get_stats()
    return ok("Statistics retrieved successfully", stats.model_dump(by_alias=True))
