#!/usr/bin/env python3
# src/sse_stream_server/endpoints/health.py
"""
endpoints/health.py - Health check

Cheap liveness probe for load balancers; never behind the auth gate.
"""

import time
from collections.abc import Callable

import orjson
from starlette.requests import Request
from starlette.responses import Response

from ..constants import CONTENT_TYPE_JSON, HEADERS_JSON_NOCACHE
from ..registry import ClientRegistry
from ..writer import ResponseWriter


class HealthHandler:
    def __init__(self, registry: ClientRegistry, clock: Callable[[], float] = time.time):
        self.registry = registry
        self.clock = clock
        self.start_time = clock()

    async def __call__(self, request: Request, writer: ResponseWriter) -> None:
        now = self.clock()
        health_data = {
            "status": "healthy",
            "uptime": round(now - self.start_time, 2),
            "clients": len(self.registry),
            "timestamp": now,
        }
        response = Response(orjson.dumps(health_data), media_type=CONTENT_TYPE_JSON, headers=HEADERS_JSON_NOCACHE)
        await response(request.scope, request.receive, writer)
