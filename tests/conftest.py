#!/usr/bin/env python3
"""Shared fixtures: in-memory ASGI send/receive and request builders."""

from collections.abc import Callable
from typing import Any

import anyio
import pytest
from starlette.requests import Request

from sse_stream_server.registry import ClientRegistry


def make_scope(
    path: str = "/stream",
    query_string: str = "",
    headers: dict[str, str] | None = None,
    client: tuple[str, int] | None = ("127.0.0.1", 50000),
    method: str = "GET",
) -> dict[str, Any]:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": query_string.encode(),
        "root_path": "",
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()],
        "client": client,
        "server": ("testserver", 80),
    }


def make_receive(disconnect: bool = False) -> Callable[[], Any]:
    """Build a receive callable; with ``disconnect`` the peer leaves right after the request."""
    messages = [{"type": "http.request", "body": b"", "more_body": False}]
    if disconnect:
        messages.append({"type": "http.disconnect"})

    async def receive() -> dict[str, Any]:
        if messages:
            return messages.pop(0)
        await anyio.sleep_forever()
        return {"type": "http.disconnect"}  # pragma: no cover

    return receive


class RecordingSend:
    """ASGI send that records messages, optionally failing after N body chunks."""

    def __init__(self, fail_after: int | None = None):
        self.messages: list[dict[str, Any]] = []
        self.fail_after = fail_after
        self.body_chunks = 0

    async def __call__(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.body" and message.get("body"):
            if self.fail_after is not None and self.body_chunks >= self.fail_after:
                raise OSError("Connection reset by peer")
            self.body_chunks += 1
        self.messages.append(message)

    @property
    def status(self) -> int | None:
        for message in self.messages:
            if message["type"] == "http.response.start":
                return message["status"]
        return None

    @property
    def headers(self) -> dict[str, str]:
        for message in self.messages:
            if message["type"] == "http.response.start":
                return {k.decode(): v.decode() for k, v in message["headers"]}
        return {}

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages if m["type"] == "http.response.body")

    @property
    def completed(self) -> bool:
        return any(m["type"] == "http.response.body" and not m.get("more_body", False) for m in self.messages)

    def events(self) -> list[tuple[str, list[str]]]:
        """Parse the recorded body into ``(id, data_lines)`` pairs."""
        return parse_events(self.body)


def parse_events(body: bytes) -> list[tuple[str, list[str]]]:
    events = []
    for block in body.decode().split("\n\n"):
        if not block:
            continue
        event_id = ""
        data: list[str] = []
        for line in block.split("\n"):
            if line.startswith("id: "):
                event_id = line[len("id: ") :]
            elif line.startswith("data: "):
                data.append(line[len("data: ") :])
        events.append((event_id, data))
    return events


@pytest.fixture
def registry() -> ClientRegistry:
    return ClientRegistry()


@pytest.fixture
def make_send() -> Callable[..., RecordingSend]:
    return RecordingSend


@pytest.fixture
def send() -> RecordingSend:
    return RecordingSend()


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for Starlette requests: ``make_request(path, query, headers, client, disconnect)``."""

    def factory(
        path: str = "/stream",
        query_string: str = "",
        headers: dict[str, str] | None = None,
        client: tuple[str, int] | None = ("127.0.0.1", 50000),
        disconnect: bool = False,
        method: str = "GET",
    ) -> Request:
        scope = make_scope(path, query_string, headers, client, method)
        return Request(scope, make_receive(disconnect))

    return factory


@pytest.fixture
def events_of() -> Callable[[bytes], list[tuple[str, list[str]]]]:
    return parse_events


@pytest.fixture
def scope_factory() -> Callable[..., dict[str, Any]]:
    return make_scope


@pytest.fixture
def receive_factory() -> Callable[..., Any]:
    return make_receive
