"""
Error types for the stream server.

Every error here is scoped to a single request or to startup; none of them
is meant to take the process down once it is serving.
"""


class StreamServerError(Exception):
    """Base class for stream server errors."""


class WriteError(StreamServerError):
    """Bytes could not be delivered to the peer.

    Raised by the response writer when the transport fails or the client has
    already gone away. Callers stop writing; the write is never retried.
    """


class InvalidEventCountError(StreamServerError, ValueError):
    """The requested event count is negative."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Event count must be non-negative, got {count}")


class ConfigurationError(StreamServerError):
    """A configuration value could not be used."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)
