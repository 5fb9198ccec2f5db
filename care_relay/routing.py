import os
import pkgutil
from importlib import import_module

from fastapi import APIRouter

from care_relay.logging import logger

# Track registered modules to prevent duplicate logging
_registered_http_modules: set[str] = set()
_registered_ws_modules: set[str] = set()


def collect_subrouters() -> APIRouter:
    """
    Collects and registers all HTTP and WebSocket routers for the application.

    Every module under `api/http` and `api/ws/consumers` is expected to
    expose a module-level `router`; each one is imported and included in a
    single `APIRouter`, which is returned as the application's entry point.
    """
    main_router: APIRouter = APIRouter()

    app_dir = os.path.dirname(__file__)
    app_name = os.path.basename(app_dir)

    for _, module, _ in pkgutil.iter_modules([f"{app_dir}/api/http"]):
        api = import_module(f".{module}", package=f"{app_name}.api.http")

        main_router.include_router(api.router)

        # Only log on first registration
        if module not in _registered_http_modules:
            logger.info(f'Register "{module}" api')
            _registered_http_modules.add(module)

    for _, module, _ in pkgutil.iter_modules([f"{app_dir}/api/ws/consumers"]):
        ws_consumer = import_module(
            f".{module}", package=f"{app_name}.api.ws.consumers"
        )

        main_router.include_router(ws_consumer.router)

        # Only log on first registration
        if module not in _registered_ws_modules:
            logger.info(f'Register "{module}" websocket consumer')
            _registered_ws_modules.add(module)

    return main_router
