#!/usr/bin/env python3
"""
sse_stream_server - resumable server-sent event streams

Each client connected to ``/stream`` receives a ``hello`` greeting followed
by one ``message-<n>`` event per interval. Clients resume with a
``Last-Event-Id: message-<n>`` header and limit the stream with
``?count=<N>``. ``/status`` lists connected clients.

    from sse_stream_server import ServerConfig, create_app

    app = create_app(ServerConfig(auth_token="secret"))
"""

from .adapter import AdaptedHandler, adapt_handler
from .app import create_app
from .auth import allow_all_validator, token_auth_validator, validator_for_token
from .config import ServerConfig, load_auth_token
from .constants import SERVER_VERSION
from .errors import ConfigurationError, InvalidEventCountError, StreamServerError, WriteError
from .events import EventWriter, encode_event
from .middleware import Handler, Middleware, auth_middleware, chain, logging_middleware
from .randomness import generate_random_string
from .registry import Client, ClientRegistry
from .writer import ResponseWriter

__version__ = SERVER_VERSION
__all__ = [
    "AdaptedHandler",
    "Client",
    "ClientRegistry",
    "ConfigurationError",
    "EventWriter",
    "Handler",
    "InvalidEventCountError",
    "Middleware",
    "ResponseWriter",
    "ServerConfig",
    "StreamServerError",
    "WriteError",
    "adapt_handler",
    "allow_all_validator",
    "auth_middleware",
    "chain",
    "create_app",
    "encode_event",
    "generate_random_string",
    "load_auth_token",
    "logging_middleware",
    "token_auth_validator",
    "validator_for_token",
]
