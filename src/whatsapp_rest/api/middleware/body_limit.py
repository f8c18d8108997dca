"""Request body size limit middleware."""

from __future__ import annotations

import structlog
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from whatsapp_rest.api.errors import error_response
from whatsapp_rest.core.domain.errors import PayloadTooLargeError

logger = structlog.get_logger(__name__)


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``max_bytes``.

    The declared ``Content-Length`` is checked up front. Bodies without
    one (chunked uploads) are counted as they are received; once the
    count passes the limit the downstream read fails and the client gets
    a 413 instead of whatever the route would have answered.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                response = error_response(status_code=400, message="Invalid Content-Length header")
                await response(scope, receive, send)
                return
            if length > self.max_bytes:
                await self._reject(scope, receive, send, path, length)
                return

        received = 0
        overflowed = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, overflowed
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    overflowed = True
                    raise PayloadTooLargeError(self.max_bytes)
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Whatever the route answers after an overflow is replaced by the 413.
            if overflowed:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except Exception:
            if not overflowed:
                raise

        if overflowed and not response_started:
            await self._reject(scope, receive, send, path, received)

    async def _reject(
        self, scope: Scope, receive: Receive, send: Send, path: str, length: int
    ) -> None:
        logger.warning(
            "api.body_too_large",
            path=path,
            content_length=length,
            limit=self.max_bytes,
        )
        response = error_response(
            status_code=413,
            message=PayloadTooLargeError(self.max_bytes).message,
        )
        await response(scope, receive, send)
