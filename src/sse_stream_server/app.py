#!/usr/bin/env python3
# src/sse_stream_server/app.py
"""
Application factory.

Builds the Starlette application: one client registry per app, shared by
the stream and status handlers, and the middleware chains for each route.
"""

import logging

from starlette.applications import Starlette
from starlette.routing import Route

from .adapter import adapt_handler
from .auth import validator_for_token
from .config import ServerConfig
from .constants import PATH_HEALTH, PATH_STATUS, PATH_STREAM
from .endpoints import HealthHandler, StatusHandler, StreamHandler
from .middleware import auth_middleware, logging_middleware
from .registry import ClientRegistry

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig | None = None, registry: ClientRegistry | None = None) -> Starlette:
    """
    Create the Starlette application.

    Args:
        config: Server configuration; defaults to ``ServerConfig()``
        registry: Client registry to share; a new one is created if omitted

    Returns:
        Configured Starlette application, with the registry on ``app.state.registry``
    """
    config = config or ServerConfig()
    registry = registry if registry is not None else ClientRegistry()

    # Auth wraps logging, so rejected requests never reach the access log.
    protected = [logging_middleware(), auth_middleware(validator_for_token(config.auth_token))]

    stream_handler = StreamHandler(registry, interval=config.event_interval)

    routes = [
        Route(PATH_STREAM, adapt_handler(stream_handler, *protected), methods=["GET"]),
        Route(PATH_STATUS, adapt_handler(StatusHandler(registry), *protected), methods=["GET"]),
        Route(PATH_HEALTH, adapt_handler(HealthHandler(registry), logging_middleware()), methods=["GET"]),
    ]

    app = Starlette(debug=config.debug, routes=routes)
    app.state.registry = registry
    app.state.config = config

    if config.auth_enabled:
        logger.info("Bearer token authentication enabled")
    else:
        logger.warning("No auth token configured; accepting all requests")

    return app
