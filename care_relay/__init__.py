# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from care_relay.logging import logger
from care_relay.managers.websocket_connection_manager import websocket_gateway
from care_relay.relay.service import relay_service
from care_relay.routing import collect_subrouters
from care_relay.settings import app_settings


def startup():
    """
    Application startup handler
    """

    async def wrapper():
        """
        Publishes application info and initial binding gauges.
        """
        logger.info("Application startup initiated")

        from care_relay.utils.metrics import MetricsCollector, app_info

        app_info.labels(
            version=app_settings.APP_VERSION,
            python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            environment=app_settings.ENVIRONMENT.value,
        ).set(1)
        MetricsCollector.record_bindings(relay_service.lifecycle.stats())
        logger.info("Initialized Prometheus metrics")

        logger.info(
            f"Relay listening for websocket clients on {app_settings.WS_PATH}"
        )

    return wrapper


def shutdown():
    """
    Application shutdown handler
    """

    async def wrapper():
        """
        Asynchronous shutdown wrapper that performs graceful cleanup.

        Cleanup order:
        1. Close every open websocket (clients must log in again after
           reconnecting)
        2. Drop all bindings
        """
        logger.info("Application shutdown initiated")

        try:
            await websocket_gateway.close_all()
        except Exception as ex:
            logger.error(f"Error closing websocket connections: {ex}")

        relay_service.registry.clear()

        logger.info("Application shutdown complete")

    return wrapper


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Runs the startup handler before serving and the shutdown handler after.
    """
    await startup()()
    try:
        yield
    finally:
        await shutdown()()


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Runs startup and shutdown through `lifespan` and includes the routers
    collected by `care_relay.routing.collect_subrouters()`: the health, stats and
    metrics HTTP endpoints and the relay WebSocket consumer.
    """
    app = FastAPI(
        title=app_settings.APP_TITLE,
        description="Real-time message relay between care seekers and providers",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())

    return app
