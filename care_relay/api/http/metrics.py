"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get(
    "/metrics",
    response_class=Response,
    summary="Prometheus metrics endpoint",
    tags=["metrics"],
)
async def metrics() -> Response:
    """
    Expose Prometheus metrics for monitoring.

    Returns:
        Response: Metrics in Prometheus text format.

    Example:
        ```
        # HELP relay_messages_routed_total Messages handled by the router
        # TYPE relay_messages_routed_total counter
        relay_messages_routed_total{kind="Chat",outcome="delivered"} 42.0
        ```
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
