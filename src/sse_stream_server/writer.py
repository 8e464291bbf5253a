#!/usr/bin/env python3
# src/sse_stream_server/writer.py
"""
Status-tracking response writer.

Wraps the ASGI ``send`` callable for the lifetime of one request. The writer
is itself a ``send`` callable, so any Starlette ``Response`` can be rendered
through it, and it remembers the status code that actually went out so that
middleware can read it after the handler has returned.
"""

import logging
from collections.abc import Mapping

from starlette.types import Message, Send

from .constants import HttpStatus
from .errors import WriteError

logger = logging.getLogger(__name__)

RESPONSE_START = "http.response.start"
RESPONSE_BODY = "http.response.body"


class ResponseWriter:
    """Decorates an ASGI ``send`` and records what was written.

    One instance per request; never reused.
    """

    def __init__(self, send: Send):
        self._send = send
        self.status_code = int(HttpStatus.OK)
        self.headers_sent = False
        self.finished = False
        self.disconnected = False
        self.bytes_written = 0

    async def __call__(self, message: Message) -> None:
        if self.disconnected:
            raise WriteError("Client disconnected")

        message_type = message["type"]
        if message_type == RESPONSE_START:
            self.status_code = message["status"]
            self.headers_sent = True
        elif message_type == RESPONSE_BODY:
            self.bytes_written += len(message.get("body", b""))
            if not message.get("more_body", False):
                self.finished = True

        try:
            await self._send(message)
        except OSError as e:
            self.disconnected = True
            raise WriteError(f"Transport write failed: {e}") from e

    async def start(self, status_code: int, headers: Mapping[str, str] | None = None) -> None:
        """Send the status line and headers."""
        raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
        await self({"type": RESPONSE_START, "status": int(status_code), "headers": raw_headers})

    async def write(self, chunk: bytes) -> None:
        """Deliver ``chunk`` to the transport immediately."""
        if not self.headers_sent:
            await self.start(self.status_code)
        await self({"type": RESPONSE_BODY, "body": chunk, "more_body": True})

    async def end(self) -> None:
        """Finish the response body."""
        if not self.headers_sent:
            await self.start(self.status_code)
        await self({"type": RESPONSE_BODY, "body": b"", "more_body": False})

    def mark_disconnected(self) -> None:
        """Record that the peer has gone away; later writes fail."""
        if not self.disconnected:
            logger.debug("Peer disconnected")
        self.disconnected = True
