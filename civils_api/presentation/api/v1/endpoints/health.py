"""Health check endpoints for monitoring and orchestration."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from civils_api.infrastructure.config import Settings, get_settings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "version": "0.1.0",
                    "environment": "production",
                }
            ]
        }
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health Check",
    description="""
Check if the API is operational.

Always reachable: the health path is exempt from the authorization rule
so load balancers can probe it without credentials.
    """,
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Return the status of the application."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get(
    "/",
    status_code=status.HTTP_200_OK,
    summary="API Root",
    description="Root endpoint with navigation links.",
)
async def root(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Root endpoint providing API information and navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "docs": settings.docs_url,
        "health": f"{settings.api_v1_prefix}/health",
    }
