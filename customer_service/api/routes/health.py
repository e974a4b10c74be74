from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from customer_service import __version__
from customer_service.api.dependencies import get_app_settings
from customer_service.core.config import Settings
from customer_service.core.logging import get_logger

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health(settings: Settings = Depends(get_app_settings)) -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus(status="ok", service=settings.PROJECT_NAME)
