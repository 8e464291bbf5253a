#!/usr/bin/env python3
# src/sse_stream_server/http_utils.py
"""Small helpers for reading request metadata."""

from starlette.requests import Request

UNKNOWN_REMOTE = "unknown"


def remote_identity(request: Request) -> str:
    """Return the peer as ``host:port``, the key used for the client registry."""
    client = request.client
    if client is None:
        return UNKNOWN_REMOTE
    return f"{client.host}:{client.port}"


def request_target(request: Request) -> str:
    """Return the path plus query string as the client sent it."""
    path = request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path
