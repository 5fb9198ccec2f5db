"""Health check endpoint for monitoring service status."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from care_relay.relay.service import relay_service
from care_relay.schemas.stats import RelayStats
from care_relay.settings import app_settings
from care_relay.utils.uptime import get_uptime_seconds

router = APIRouter()


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    environment: str
    uptime: float
    connections: RelayStats


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    tags=["health"],
)
async def health_check() -> HealthResponse:
    """
    Report that the relay is up, with its current binding counts.

    The relay keeps all state in memory and has no external dependencies
    to probe, so a response at all means it is healthy.

    Returns:
        HealthResponse: Status, environment, uptime and bound identities.
    """
    return HealthResponse(
        status="healthy",
        environment=app_settings.ENVIRONMENT.value,
        uptime=get_uptime_seconds(),
        connections=relay_service.lifecycle.stats(),
    )
