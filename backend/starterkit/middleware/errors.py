"""
StarterKit Backend — Unhandled Error Middleware
=================================================

What:  Turns any exception a handler did not expect into a 500 JSON response.
How:   Innermost stage of the chain. The response it renders travels back out
       through access_log, compression, cors and security_headers like any
       other response, so browsers still see CORS and CSP headers on a 500.
Who:   Everything raised below it that is not a StarterKitError or an
       HTTPException (those are answered by the handlers in main.py first).

Response body:
    production   {"error": "Internal server error"}
    otherwise    {"error": str(exc), "stack": "<formatted traceback>"}
"""

import logging
import traceback

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


def render_unhandled_error(exc: Exception, expose_details: bool) -> JSONResponse:
    if not expose_details:
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content={"error": str(exc), "stack": stack})


class UnhandledErrorMiddleware:
    """
    Catch-all for errors raised inside handlers.

    Args:
        expose_details: include the message and traceback in the body
                        (False in production).
    """

    def __init__(self, app: ASGIApp, expose_details: bool = False) -> None:
        self.app = app
        self.expose_details = expose_details

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            logger.error("Error: %s", exc, exc_info=exc)
            # Half-sent responses cannot be replaced; let the server close the connection
            if response_started:
                raise
            response = render_unhandled_error(exc, self.expose_details)
            await response(scope, receive, send)
