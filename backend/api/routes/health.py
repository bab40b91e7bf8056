"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import ServiceContainer, get_container
from ..models.responses import ApiResponse, ok

router = APIRouter()


@router.get("/health", response_model=ApiResponse)
async def health_check(
    container: ServiceContainer = Depends(get_container),
) -> ApiResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return ok(
        "Service is healthy",
        {"status": "healthy", "version": container.settings.app_version},
    )


@router.get("/ready", response_model=ApiResponse)
async def readiness_check(
    container: ServiceContainer = Depends(get_container),
):
    """
    Readiness check endpoint.

    Checks the document store, the identity provider and the mail
    transport; 503 if any of them is unavailable.
    """
    checks = await container.health_check()
    if all(state == "ok" for state in checks.values()):
        return ok("Service is ready", {"status": "ready", "checks": checks})

    body = ApiResponse(
        success=False,
        message="Service is not ready",
        data={"status": "not_ready", "checks": checks},
        code="SERVICE_UNAVAILABLE",
    )
    return JSONResponse(status_code=503, content=body.model_dump())
