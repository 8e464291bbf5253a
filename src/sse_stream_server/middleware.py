#!/usr/bin/env python3
# src/sse_stream_server/middleware.py
"""
Request middleware.

A handler is an async callable taking ``(request, writer)``. A middleware
turns one handler into another: it may run code before the inner handler,
skip it entirely, or run more code after it returns. Chains are composed
once, in an explicit order, when routes are built.

Example::

    handler = chain(stream_handler, [logging_middleware(), auth_middleware(validator)])

Here ``auth_middleware`` is outermost: rejected requests never start the
access-log timer and are not logged.
"""

import logging
import time
from collections.abc import Callable, Iterable
from typing import Protocol

from starlette.requests import Request

from .auth import AuthValidator
from .constants import ACCESS_LOGGER, HEADERS_CORS_GET, HttpStatus
from .http_utils import remote_identity, request_target
from .writer import ResponseWriter

logger = logging.getLogger(__name__)


class Handler(Protocol):
    async def __call__(self, request: Request, writer: ResponseWriter) -> None: ...


Middleware = Callable[[Handler], Handler]


def chain(handler: Handler, middlewares: Iterable[Middleware]) -> Handler:
    """Wrap ``handler`` with each middleware in turn; the first one ends up innermost."""
    wrapped = handler
    for middleware in middlewares:
        wrapped = middleware(wrapped)
    return wrapped


def auth_middleware(validator: AuthValidator) -> Middleware:
    """Reject requests the validator refuses with 401 and CORS headers, no body."""

    def wrap(handler: Handler) -> Handler:
        async def authenticated(request: Request, writer: ResponseWriter) -> None:
            if not validator(request):
                logger.debug(f"Rejected unauthenticated request from {remote_identity(request)}")
                await writer.start(HttpStatus.UNAUTHORIZED, HEADERS_CORS_GET)
                return
            await handler(request, writer)

        return authenticated

    return wrap


def logging_middleware(
    access_logger: logging.Logger | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> Middleware:
    """Log one line per request once the inner handler has finished.

    The elapsed time covers the whole inner handler, which for a stream is
    the lifetime of the connection.
    """
    out = access_logger or logging.getLogger(ACCESS_LOGGER)

    def wrap(handler: Handler) -> Handler:
        async def logged(request: Request, writer: ResponseWriter) -> None:
            start = clock()
            try:
                await handler(request, writer)
            finally:
                elapsed = clock() - start
                out.info(
                    f"<- {remote_identity(request)}: {request.method} {request_target(request)} "
                    f"{writer.status_code} ({elapsed:.3f}s)"
                )

        return logged

    return wrap
