"""
StarterKit Backend — Request Body Limit Middleware
====================================================

What:  Caps the size of request bodies (default 10MB).
How:   Two checks:
       1. A declared Content-Length over the limit is answered with 413
          before the application sees the request.
       2. Bodies without a trustworthy length (chunked) are counted while
          they are received; crossing the limit raises PayloadTooLargeError,
          which the global handler turns into 413.
Who:   Last stage of the middleware chain, right before routing. Decoding of
       JSON and URL-encoded bodies happens in `starterkit.dependencies.read_body`.

Written as a plain ASGI middleware because it wraps `receive`.
"""

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from starterkit.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodyLimitMiddleware:
    """Rejects request bodies larger than `max_body_size` bytes."""

    def __init__(self, app: ASGIApp, max_body_size: int = 10_485_760) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_body_size:
            logger.warning(
                "Rejected %s %s: declared body of %s bytes exceeds %d",
                scope.get("method"),
                scope.get("path"),
                declared,
                self.max_body_size,
            )
            response = JSONResponse(status_code=413, content={"error": "Payload too large"})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise PayloadTooLargeError(
                        context={"received": received, "limit": self.max_body_size}
                    )
            return message

        await self.app(scope, limited_receive, send)
