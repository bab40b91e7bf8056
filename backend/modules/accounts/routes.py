"""
Authentication API endpoints.

Registration, email verification, login, password reset and session
endpoints under /api/auth.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_account_service
from api.middleware.auth import get_current_user, get_optional_user
from api.middleware.rate_limit import RateLimit
from api.models.responses import ApiResponse, ok
from modules.auth.models import AuthenticatedUser

from .interfaces import IAccountService
from .models import (
    EmailRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenRequest,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[Depends(RateLimit("register"))],
)
async def register(
    request: RegisterRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    """
    Register a new account.

    The account starts unverified; a verification link is emailed.
    """
    profile = await service.register(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        language=request.language,
    )
    return ok(
        "User registered successfully. Please check your email to verify your account.",
        {"user": profile},
    )


@router.post(
    "/login",
    response_model=ApiResponse,
    dependencies=[Depends(RateLimit("login"))],
)
async def login(
    request: LoginRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    result = await service.login(request.email, request.password)
    return ok(
        "Login successful",
        {
            "user": result.profile,
            "accessToken": result.tokens.access_token,
            "refreshToken": result.tokens.refresh_token,
            "expiresIn": result.tokens.expires_in,
            "tokenType": result.tokens.token_type,
        },
    )


@router.post("/verify-email", response_model=ApiResponse)
async def verify_email(
    request: TokenRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    profile = await service.verify_email(request.token)
    return ok("Email verified successfully", {"user": profile})


@router.post(
    "/resend-verification",
    response_model=ApiResponse,
    dependencies=[Depends(RateLimit("resend_verification"))],
)
async def resend_verification(
    request: EmailRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    await service.resend_verification(request.email)
    return ok("Verification email sent successfully")


@router.post(
    "/forgot-password",
    response_model=ApiResponse,
    dependencies=[Depends(RateLimit("forgot_password"))],
)
async def forgot_password(
    request: EmailRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    """
    Request a password reset link.

    The response is the same whether or not the email is registered.
    """
    message = await service.forgot_password(request.email)
    return ok(message)


@router.post(
    "/reset-password",
    response_model=ApiResponse,
    dependencies=[Depends(RateLimit("reset_password"))],
)
async def reset_password(
    request: ResetPasswordRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    await service.reset_password(request.token, request.password)
    return ok("Password reset successfully")


@router.post("/refresh-token", response_model=ApiResponse)
async def refresh_token(
    request: RefreshTokenRequest,
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    tokens = await service.refresh_session(request.refresh_token)
    return ok(
        "Token refreshed successfully",
        {
            "accessToken": tokens.access_token,
            "refreshToken": tokens.refresh_token,
            "expiresIn": tokens.expires_in,
            "tokenType": tokens.token_type,
        },
    )


@router.post("/logout", response_model=ApiResponse)
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
) -> ApiResponse:
    await service.logout(user)
    return ok("Logout successful")


@router.get("/me", response_model=ApiResponse)
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
) -> ApiResponse:
    return ok("User retrieved successfully", {"user": user.profile})


@router.get("/session", response_model=ApiResponse)
async def session(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> ApiResponse:
    """Report whether the request carries a valid session."""
    if user is None:
        return ok("No active session", {"authenticated": False})
    return ok("Active session", {"authenticated": True, "user": user.profile})
