"""
StarterKit Backend — Access Logging Middleware
================================================

What:  One log line for every HTTP request, emitted once the response is done.
How:   Wraps `send` to capture the status line and headers, measures the
       duration, and formats the line in one of two layouts chosen from the
       environment when the app is created.
Who:   Applied to every request, inside compression and outside body parsing.

Formats:
    dev (outside production)
        GET /api/v1/health 200 1.234 ms - 87

    combined (production, Apache/NCSA combined log format)
        127.0.0.1 - - [15/Jan/2024:12:00:00 +0000] "GET /api/v1/health HTTP/1.1" 200 87 "-" "curl/8.4.0"

Request bodies and Authorization headers are never logged.

Written as a plain ASGI middleware: response messages are passed through
untouched, so the gzip stage outside still sees whole bodies.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("starterkit.access")

LOG_FORMATS = ("dev", "combined")


def _request_target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def format_dev(request: Request, status_code: int, headers: Headers, duration_ms: float) -> str:
    length = headers.get("content-length", "-")
    return f"{request.method} {_request_target(request)} {status_code} {duration_ms:.3f} ms - {length}"


def format_combined(
    request: Request,
    status_code: int,
    headers: Headers,
    duration_ms: float,
    now: Optional[datetime] = None,
) -> str:
    now = now or datetime.now(timezone.utc)
    client_ip = request.client.host if request.client else "-"
    http_version = request.scope.get("http_version", "1.1")
    length = headers.get("content-length", "-")
    referrer = request.headers.get("referer", "-")
    user_agent = request.headers.get("user-agent", "-")
    return (
        f"{client_ip} - - [{now.strftime('%d/%b/%Y:%H:%M:%S +0000')}] "
        f'"{request.method} {_request_target(request)} HTTP/{http_version}" '
        f"{status_code} {length} "
        f'"{referrer}" "{user_agent}"'
    )


class AccessLogMiddleware:
    """
    Logs method, target, status and duration of each request.

    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    A request whose handler raised is logged as 500, the status the
    catch-all error handler answers with.
    """

    def __init__(self, app: ASGIApp, log_format: str = "dev") -> None:
        if log_format not in LOG_FORMATS:
            raise ValueError(f"Unknown access log format '{log_format}'. Use one of: {LOG_FORMATS}")
        self.app = app
        self.log_format = log_format

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500
        response_headers = Headers()

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, response_headers
            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_headers = Headers(raw=message.get("headers", []))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._log(Request(scope), status_code, response_headers, duration_ms)

    def _log(self, request: Request, status: int, headers: Headers, duration_ms: float) -> None:
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        if self.log_format == "combined":
            line = format_combined(request, status, headers, duration_ms)
        else:
            line = format_dev(request, status, headers, duration_ms)

        logger.log(
            log_level,
            line,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
