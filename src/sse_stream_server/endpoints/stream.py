#!/usr/bin/env python3
# src/sse_stream_server/endpoints/stream.py
"""
endpoints/stream.py - Event stream sessions

One session per connection:

1. parse ``count`` (negative is rejected with 400 before anything else)
2. register the client, honouring a ``Last-Event-Id: message-<n>`` cursor
3. send the stream headers and a ``hello`` greeting
4. every ``interval`` seconds emit ``message-<cursor>`` and advance, until
   the terminal cursor is reached or the client goes away
5. always remove the client from the registry on the way out

Nothing is replayed from history: the payload for cursor ``n`` is
recomputed from ``n``, so resumption only needs the cursor.
"""

import logging
import re
import time
from collections.abc import Callable

import anyio
import orjson
from starlette.requests import Request

from ..constants import (
    DEFAULT_EVENT_INTERVAL,
    DEFAULT_START_EVENT_ID,
    HEADER_EXPECTED_EVENTS,
    HEADER_LAST_EVENT_ID,
    HEADERS_CORS_GET,
    HEADERS_SSE,
    HELLO_EVENT_ID,
    MAX_EVENT_ID,
    MESSAGE_ID_PREFIX,
    QUERY_COUNT,
    RANDOM_STRING_LENGTH,
    HttpStatus,
)
from ..errors import InvalidEventCountError, WriteError
from ..events import EventWriter
from ..http_utils import remote_identity
from ..randomness import generate_random_string
from ..registry import Client, ClientRegistry
from ..writer import ResponseWriter

logger = logging.getLogger(__name__)

_CURSOR_PATTERN = re.compile(rf"{re.escape(MESSAGE_ID_PREFIX)}([0-9]+)")


# ============================================================================
# Request parsing
# ============================================================================


def parse_resume_cursor(value: str | None) -> int | None:
    """Return ``n`` from ``message-<n>``, or None when absent or malformed."""
    if not value:
        return None
    match = _CURSOR_PATTERN.fullmatch(value.strip())
    if match is None:
        return None
    cursor = int(match.group(1))
    if cursor > MAX_EVENT_ID:
        return None
    return cursor


def parse_event_count(value: str | None) -> int | None:
    """Return the requested number of events, or None for an unbounded stream.

    Raises:
        InvalidEventCountError: the value parses as a negative integer.
    """
    if not value or not value.isascii() or not value.removeprefix("-").isdigit():
        return None
    count = int(value)
    if count < 0:
        raise InvalidEventCountError(count)
    return count


def terminal_event_id(start: int, count: int | None) -> int:
    """Cursor at which the stream stops; saturates at ``MAX_EVENT_ID``.

    An unbounded stream runs until ``MAX_EVENT_ID`` so every id it emits can
    be handed back as a resume cursor.
    """
    if count is None:
        return MAX_EVENT_ID
    if count > MAX_EVENT_ID - start:
        return MAX_EVENT_ID
    return start + count


def event_id_for(cursor: int) -> str:
    return f"{MESSAGE_ID_PREFIX}{cursor}"


def build_stream_headers(count: int | None) -> dict[str, str]:
    headers = dict(HEADERS_SSE)
    if count is not None:
        headers[HEADER_EXPECTED_EVENTS] = str(count)
    return headers


def build_payload(cursor: int, now: float, random_length: int = RANDOM_STRING_LENGTH) -> str:
    """JSON body of a data event; indented so it spans several ``data:`` lines."""
    body = {"time": int(now), "random": generate_random_string(cursor, random_length)}
    return orjson.dumps(body, option=orjson.OPT_INDENT_2).decode()


# ============================================================================
# Session engine
# ============================================================================


class StreamHandler:
    """Streams events to each connected client."""

    def __init__(
        self,
        registry: ClientRegistry,
        interval: float = DEFAULT_EVENT_INTERVAL,
        random_length: int = RANDOM_STRING_LENGTH,
        start_event_id: int = DEFAULT_START_EVENT_ID,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.interval = interval
        self.random_length = random_length
        self.start_event_id = start_event_id
        self.clock = clock

    async def __call__(self, request: Request, writer: ResponseWriter) -> None:
        identity = remote_identity(request)

        try:
            count = parse_event_count(request.query_params.get(QUERY_COUNT))
        except InvalidEventCountError as e:
            logger.debug(f"Rejecting stream from {identity}: {e}")
            await writer.start(HttpStatus.BAD_REQUEST, HEADERS_CORS_GET)
            return

        client = Client(remote=identity, last_event_id=self.start_event_id)
        self.registry.insert(identity, client)
        try:
            await self._run_session(request, writer, client, count)
        finally:
            self.registry.remove(identity, client)
            logger.info(f"Client {identity} closed connection.")

    async def _run_session(
        self,
        request: Request,
        writer: ResponseWriter,
        client: Client,
        count: int | None,
    ) -> None:
        last_event_id = request.headers.get(HEADER_LAST_EVENT_ID)
        cursor = parse_resume_cursor(last_event_id)
        if cursor is not None:
            client.resume_from(cursor)
        elif last_event_id:
            logger.debug(f"Ignoring Last-Event-Id {last_event_id!r} from {client.remote}")

        terminal = terminal_event_id(client.last_event_id, count)
        logger.info(f"Handling incoming request from {client.remote} @ {client.last_event_id}...")

        events = EventWriter(writer)
        try:
            await writer.start(HttpStatus.OK, build_stream_headers(count))
            await events.emit(HELLO_EVENT_ID, f"Hello, {client.remote}!")

            while client.last_event_id < terminal:
                await anyio.sleep(self.interval)
                current = client.last_event_id
                await events.emit(event_id_for(current), build_payload(current, self.clock(), self.random_length))
                client.advance()
        except WriteError as e:
            logger.debug(f"Stopped streaming to {client.remote} after {events.events_sent} events: {e}")
