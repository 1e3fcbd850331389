"""Health check endpoint for monitoring application status."""

from datetime import datetime, timezone

from fastapi import APIRouter

from components.core import schemas
from components.core.config import get_settings

router = APIRouter(
    prefix="/health",
    tags=["services"],
    responses={200: {"description": "Service is healthy"}},
)


@router.get("", response_model=schemas.HealthCheck)
async def health_check() -> schemas.HealthCheck:
    """Check the health status of the service."""
    return schemas.HealthCheck(
        service_name=get_settings().SERVICE_NAME,
        status="ok",
        time=datetime.now(timezone.utc),
    )
