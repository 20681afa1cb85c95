"""
StarterKit Backend — Middleware Package
========================================

What:  Cross-cutting policies applied to every request.
How:   `build_middleware_stack()` returns an explicit, ordered list of named
       stages. The list is handed to FastAPI as-is; the first entry is the
       outermost layer, so stages run in declared order on the way in and in
       reverse order on the way out.

Middleware Chain:
    Request → [security_headers] → [cors] → [compression] → [access_log] → [body_parsing]
            → [error_handling] → Route

    security_headers  CSP + hardening headers (SecurityHeadersMiddleware)
    cors              single configured origin, credentials, preflight 200
    compression       gzip for responses of 1KB and more
    access_log        dev format, or combined format in production
    body_parsing      10MB body cap; decoding happens in dependencies.read_body
    error_handling    unexpected exceptions → 500 JSON, inside every other stage
"""

from typing import List, Tuple

from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from starterkit.config import Settings
from starterkit.middleware.body_limit import BodyLimitMiddleware
from starterkit.middleware.errors import UnhandledErrorMiddleware
from starterkit.middleware.logging import AccessLogMiddleware
from starterkit.middleware.security_headers import SecurityHeadersMiddleware

MIDDLEWARE_ORDER = (
    "security_headers",
    "cors",
    "compression",
    "access_log",
    "body_parsing",
    "error_handling",
)

# Smaller responses are sent uncompressed
GZIP_MINIMUM_SIZE = 1024


def build_middleware_stack(settings: Settings) -> List[Tuple[str, Middleware]]:
    """Return the named middleware stages for `settings`, outermost first."""
    stages = [
        ("security_headers", Middleware(SecurityHeadersMiddleware)),
        (
            "cors",
            Middleware(
                CORSMiddleware,
                allow_origins=[settings.cors_origin],
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        ),
        ("compression", Middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)),
        (
            "access_log",
            Middleware(
                AccessLogMiddleware,
                log_format="combined" if settings.is_production else "dev",
            ),
        ),
        ("body_parsing", Middleware(BodyLimitMiddleware, max_body_size=settings.max_body_size)),
        (
            "error_handling",
            Middleware(UnhandledErrorMiddleware, expose_details=not settings.is_production),
        ),
    ]
    return stages
