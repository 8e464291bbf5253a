#!/usr/bin/env python3
# src/sse_stream_server/adapter.py
"""
Bind a handler chain to an ASGI route.

``adapt_handler`` composes the middleware chain once and returns an ASGI
application suitable for ``starlette.routing.Route``. Each request gets a
fresh :class:`ResponseWriter`. While the chain runs, a listener task watches
for ``http.disconnect`` so that the next write to a departed client fails
instead of being silently dropped.

Starlette's ``StreamingResponse`` is not used: it hides send failures from
the body iterator, while the session engine needs each failed write raised
as :class:`WriteError` so it can stop and clean up.
"""

import logging
from collections.abc import Sequence

import anyio
from starlette.requests import Request
from starlette.types import Receive, Scope, Send

from .errors import WriteError
from .middleware import Handler, Middleware, chain
from .writer import ResponseWriter

logger = logging.getLogger(__name__)

HTTP_DISCONNECT = "http.disconnect"


class AdaptedHandler:
    """ASGI application running one handler chain."""

    def __init__(self, handler: Handler, middlewares: Sequence[Middleware] = ()):
        self.handler = handler
        self.middlewares = tuple(middlewares)
        self._chain = chain(handler, self.middlewares)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        writer = ResponseWriter(send)

        async with anyio.create_task_group() as task_group:
            task_group.start_soon(self._listen_for_disconnect, receive, writer)
            try:
                await self._chain(request, writer)
            except WriteError as e:
                logger.debug(f"Response to {request.url.path} abandoned: {e}")
            finally:
                task_group.cancel_scope.cancel()

        await self._complete(writer)

    @staticmethod
    async def _listen_for_disconnect(receive: Receive, writer: ResponseWriter) -> None:
        while True:
            message = await receive()
            if message["type"] == HTTP_DISCONNECT:
                writer.mark_disconnected()
                return

    @staticmethod
    async def _complete(writer: ResponseWriter) -> None:
        if writer.finished or writer.disconnected:
            return
        try:
            await writer.end()
        except WriteError:
            logger.debug("Client went away before the response was completed")


def adapt_handler(handler: Handler, *middlewares: Middleware) -> AdaptedHandler:
    """Wrap ``handler`` in ``middlewares`` (first = innermost) for use as a route endpoint."""
    return AdaptedHandler(handler, middlewares)
