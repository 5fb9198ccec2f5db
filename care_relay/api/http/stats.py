"""Connection statistics polled by external dashboards."""

from fastapi import APIRouter, HTTPException, status

from care_relay.managers.websocket_connection_manager import websocket_gateway
from care_relay.relay.service import relay_service
from care_relay.schemas.base import CamelModel
from care_relay.schemas.stats import RelayStats
from care_relay.settings import app_settings
from care_relay.utils.uptime import get_uptime_seconds

router = APIRouter()


class StatsResponse(CamelModel):
    connections: RelayStats
    open_connections: int
    uptime: float


@router.get(
    "/api/stats",
    response_model=StatsResponse,
    response_model_by_alias=True,
    summary="Relay connection statistics",
    tags=["stats"],
)
async def relay_stats() -> StatsResponse:
    """
    Report bound identities per role and open sockets.

    Open sockets can exceed bound identities: sockets that have not logged
    in yet, or whose identity logged in again elsewhere, are open but
    unbound.

    Raises:
        HTTPException: 404 when STATS_ENDPOINT_ENABLED is off.
    """
    if not app_settings.STATS_ENDPOINT_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Not Found"
        )

    return StatsResponse(
        connections=relay_service.lifecycle.stats(),
        open_connections=len(websocket_gateway),
        uptime=get_uptime_seconds(),
    )
