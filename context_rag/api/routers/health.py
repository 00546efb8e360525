"""
Health check API endpoints.

Routes: GET /health

Dependencies: context_rag.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from context_rag.api.deps import get_settings_dependency
from context_rag.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    environment: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy", environment=settings.environment)
