from fastapi import APIRouter

from civils_api.presentation.api.v1.endpoints import health, security


api_router = APIRouter()

# Include routers
api_router.include_router(health.router)
api_router.include_router(security.router)
