#!/usr/bin/env python3
# src/sse_stream_server/registry.py
"""
Registry of connected streaming clients.

Sessions insert themselves on connect, advance their cursor once per event,
and remove themselves on disconnect. The status endpoint reads snapshots.
Each individual operation is guarded by a lock; snapshots are not
transactional across clients.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any

from .constants import DEFAULT_START_EVENT_ID

logger = logging.getLogger(__name__)


class Client:
    """One active streaming connection.

    ``connected_at`` is fixed at creation. ``last_event_id`` is only ever
    moved by the owning session, but may be read from other threads.
    """

    def __init__(
        self,
        remote: str,
        last_event_id: int = DEFAULT_START_EVENT_ID,
        connected_at: datetime | None = None,
    ):
        self.remote = remote
        self.connected_at = connected_at or datetime.now(timezone.utc)
        self._last_event_id = last_event_id
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Client(remote={self.remote!r}, last_event_id={self.last_event_id})"

    @property
    def last_event_id(self) -> int:
        with self._lock:
            return self._last_event_id

    def resume_from(self, event_id: int) -> None:
        """Move the cursor to a client-supplied resumption point."""
        with self._lock:
            self._last_event_id = event_id

    def advance(self) -> int:
        """Increment the cursor and return the new value."""
        with self._lock:
            self._last_event_id += 1
            return self._last_event_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "remote": self.remote,
            "connectedAt": self.connected_at,
            "lastEventId": self.last_event_id,
        }


class ClientRegistry:
    """Thread-safe mapping of remote identity to live :class:`Client`."""

    def __init__(self) -> None:
        self._clients: dict[str, Client] = {}
        self._lock = threading.Lock()

    def insert(self, identity: str, client: Client) -> None:
        """Register a client; a reconnect under the same identity replaces the old entry."""
        with self._lock:
            replaced = self._clients.get(identity)
            self._clients[identity] = client
        if replaced is not None and replaced is not client:
            logger.debug(f"Replaced registry entry for {identity}")

    def remove(self, identity: str, client: Client | None = None) -> bool:
        """Remove ``identity``.

        When ``client`` is given the entry is only removed if it is still that
        client, so an overwritten session cannot erase its successor.
        Returns True if an entry was removed.
        """
        with self._lock:
            current = self._clients.get(identity)
            if current is None:
                return False
            if client is not None and current is not client:
                return False
            del self._clients[identity]
            return True

    def get(self, identity: str) -> Client | None:
        with self._lock:
            return self._clients.get(identity)

    def identities(self) -> list[str]:
        with self._lock:
            return list(self._clients)

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """Return a serializable view of every registered client."""
        with self._lock:
            entries = list(self._clients.items())
        return {identity: client.to_dict() for identity, client in entries}

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._clients
