#!/usr/bin/env python3
"""
Top-level constants shared across the sse_stream_server package.
"""

from enum import IntEnum

# ---------------------------------------------------------------------------
# Server identity
# ---------------------------------------------------------------------------
SERVER_NAME = "sse-stream-server"
SERVER_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# HTTP status codes
# ---------------------------------------------------------------------------
class HttpStatus(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    INTERNAL_SERVER_ERROR = 500


# ---------------------------------------------------------------------------
# Content types
# ---------------------------------------------------------------------------
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_SSE = "text/event-stream"


# ---------------------------------------------------------------------------
# Header names
# ---------------------------------------------------------------------------
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_CONNECTION = "Connection"
HEADER_CORS_ORIGIN = "Access-Control-Allow-Origin"
HEADER_CORS_METHODS = "Access-Control-Allow-Methods"
HEADER_AUTHORIZATION = "authorization"
HEADER_LAST_EVENT_ID = "Last-Event-Id"
HEADER_EXPECTED_EVENTS = "X-Expected-Events"


# ---------------------------------------------------------------------------
# Header values
# ---------------------------------------------------------------------------
CACHE_NO_CACHE = "no-cache"
CONNECTION_KEEP_ALIVE = "keep-alive"
CORS_ALLOW_ALL = "*"
CORS_ALLOW_GET = "GET"
BEARER_PREFIX = "Bearer "


# ---------------------------------------------------------------------------
# Pre-computed header combinations
# ---------------------------------------------------------------------------
HEADERS_CORS_GET: dict[str, str] = {
    HEADER_CORS_ORIGIN: CORS_ALLOW_ALL,
    HEADER_CORS_METHODS: CORS_ALLOW_GET,
}

HEADERS_SSE: dict[str, str] = {
    HEADER_CONTENT_TYPE: CONTENT_TYPE_SSE,
    HEADER_CACHE_CONTROL: CACHE_NO_CACHE,
    HEADER_CONNECTION: CONNECTION_KEEP_ALIVE,
    **HEADERS_CORS_GET,
}

HEADERS_JSON_NOCACHE: dict[str, str] = {
    HEADER_CACHE_CONTROL: CACHE_NO_CACHE,
}


# ---------------------------------------------------------------------------
# Event stream
# ---------------------------------------------------------------------------
MESSAGE_ID_PREFIX = "message-"
HELLO_EVENT_ID = "hello"
QUERY_COUNT = "count"

# Largest cursor a client can hold; cursor arithmetic saturates here.
MAX_EVENT_ID = 2**63 - 1

DEFAULT_START_EVENT_ID = 1
DEFAULT_EVENT_INTERVAL = 1.0
RANDOM_STRING_LENGTH = 16


# ---------------------------------------------------------------------------
# URL paths
# ---------------------------------------------------------------------------
PATH_STREAM = "/stream"
PATH_STATUS = "/status"
PATH_HEALTH = "/health"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "info"
DEFAULT_KEEPALIVE_TIMEOUT = 5

ENV_PORT = "PORT"
ENV_AUTH_TOKEN = "AUTH_TOKEN"
ENV_AUTH_TOKEN_FILE = "AUTH_TOKEN_FILE"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_EVENT_INTERVAL = "EVENT_INTERVAL"

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ACCESS_LOGGER = "sse_stream_server.access"
