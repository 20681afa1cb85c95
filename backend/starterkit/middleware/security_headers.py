"""
StarterKit Backend — Security Headers Middleware
==================================================

What:  Adds a restrictive Content-Security-Policy and the standard hardening
       headers to every response.
How:   Headers are set with `setdefault`, so a route that sets its own value wins.
When:  Outermost stage of the chain; applies to error responses too, 500s included
       (those are rendered by the innermost error_handling stage).

Content-Security-Policy:
    default-src 'self'                   everything same-origin by default
    style-src 'self' 'unsafe-inline'     inline styles allowed
    script-src 'self'                    scripts self-only
    img-src 'self' data: https:          images from self, data URIs, any https host

Cross-Origin-Embedder-Policy is deliberately never sent.
"""

from typing import Dict, Mapping, Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

CSP_DIRECTIVES: Dict[str, Sequence[str]] = {
    "default-src": ("'self'",),
    "base-uri": ("'self'",),
    "font-src": ("'self'", "https:", "data:"),
    "form-action": ("'self'",),
    "frame-ancestors": ("'self'",),
    "img-src": ("'self'", "data:", "https:"),
    "object-src": ("'none'",),
    "script-src": ("'self'",),
    "script-src-attr": ("'none'",),
    "style-src": ("'self'", "'unsafe-inline'"),
    "upgrade-insecure-requests": (),
}

DEFAULT_SECURITY_HEADERS: Dict[str, str] = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def build_csp(directives: Mapping[str, Sequence[str]]) -> str:
    """Render CSP directives as a header value, e.g. `default-src 'self';img-src ...`."""
    parts = []
    for name, sources in directives.items():
        parts.append(" ".join([name, *sources]))
    return ";".join(parts)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Sets CSP and hardening headers on every response."""

    def __init__(
        self,
        app: ASGIApp,
        csp_directives: Mapping[str, Sequence[str]] = CSP_DIRECTIVES,
        headers: Mapping[str, str] = DEFAULT_SECURITY_HEADERS,
    ):
        super().__init__(app)
        self._headers = {"Content-Security-Policy": build_csp(csp_directives), **headers}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers.setdefault(name, value)
        return response
