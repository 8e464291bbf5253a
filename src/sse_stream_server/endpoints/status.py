#!/usr/bin/env python3
# src/sse_stream_server/endpoints/status.py
"""
endpoints/status.py - Connected client snapshot

``GET /status`` returns a JSON object keyed by remote identity.
"""

import logging

import orjson
from starlette.requests import Request
from starlette.responses import Response

from ..constants import CONTENT_TYPE_JSON, HEADERS_JSON_NOCACHE, HttpStatus
from ..registry import ClientRegistry
from ..writer import ResponseWriter

logger = logging.getLogger(__name__)


class StatusHandler:
    def __init__(self, registry: ClientRegistry):
        self.registry = registry

    async def __call__(self, request: Request, writer: ResponseWriter) -> None:
        try:
            body = orjson.dumps(self.registry.snapshot())
        except (orjson.JSONEncodeError, TypeError):
            logger.exception("Failed to serialize client registry")
            await writer.start(HttpStatus.INTERNAL_SERVER_ERROR)
            return

        response = Response(body, media_type=CONTENT_TYPE_JSON, headers=HEADERS_JSON_NOCACHE)
        await response(request.scope, request.receive, writer)
