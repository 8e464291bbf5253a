#!/usr/bin/env python3
# src/sse_stream_server/events.py
"""
Event stream framing.

One event on the wire::

    id: message-7
    data: {
    data:   "time": 1700000000,
    data:   "random": "abc"
    data: }
    <blank line>

Every payload line becomes its own ``data:`` record and each event is
handed to the transport as a single chunk, so the client sees it as soon as
it is produced.
"""

import re

from .writer import ResponseWriter

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_payload_lines(payload: str) -> list[str]:
    """Split a payload on CR, LF or CRLF; a trailing break adds no empty line."""
    if not payload:
        return []
    lines = _LINE_BREAK.split(payload)
    if lines[-1] == "":
        lines.pop()
    return lines


def encode_event(event_id: str, payload: str) -> bytes:
    """Encode one event into its wire form."""
    parts = [f"id: {event_id}\n"]
    parts.extend(f"data: {line}\n" for line in split_payload_lines(payload))
    parts.append("\n")
    return "".join(parts).encode("utf-8")


class EventWriter:
    """Writes framed events to one client."""

    def __init__(self, writer: ResponseWriter):
        self.writer = writer
        self.events_sent = 0

    async def emit(self, event_id: str, payload: str) -> None:
        """Write one event and flush it.

        Raises:
            WriteError: the client can no longer be reached.
        """
        await self.writer.write(encode_event(event_id, payload))
        self.events_sent += 1
