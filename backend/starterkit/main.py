"""
StarterKit Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI instance.
Who:   The CLI (`python -m starterkit serve`) and uvicorn
       (`uvicorn --factory starterkit.main:create_app`).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                         FastAPI App                          │
    │                                                              │
    │  Middleware Chain (declared order, outermost first):         │
    │  security_headers → cors → compression → access_log →        │
    │  body_parsing → error_handling                               │
    │                                                              │
    │  Routes ({apiBase} = settings.api_base_url):                 │
    │  GET {apiBase}/health   GET/POST {apiBase}/users             │
    │  GET {apiBase}/protected   * {apiBase}/* → 404               │
    │  production: static bundle + SPA fallback                    │
    │  development: GET / banner                                   │
    │                                                              │
    │  Exception Handlers:                                         │
    │  StarterKitError → its status │ HTTPException → its status   │
    │  anything else → 500 in the error_handling stage             │
    └──────────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from starterkit import __version__
from starterkit.config import Settings, get_settings
from starterkit.exceptions import StarterKitError
from starterkit.middleware import build_middleware_stack
from starterkit.routes import fallback, health, protected, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Access lines go through the `starterkit.access` logger, so uvicorn's own
    access log is turned down to avoid double lines.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=settings.log_level_number,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    setup_logging(settings)

    logger.info("Server running on port %d", settings.port)
    logger.info("Environment: %s", settings.node_env)
    logger.info("API Base URL: %s", settings.api_base_url)
    if settings.is_production:
        logger.info("Serving frontend bundle from %s", settings.static_dir)

    yield

    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent `{"error": ...}` bodies.

    Handler hierarchy:
        StarterKitError         → exc.status_code (400, 401, 404, 413)
        HTTPException           → exc.status_code (framework 404/405)
        RequestValidationError  → 400

    Anything else is rendered as a 500 by UnhandledErrorMiddleware, the
    innermost middleware stage, so the 500 still carries CORS and CSP headers.
    """

    @app.exception_handler(StarterKitError)
    async def handle_app_error(request: Request, exc: StarterKitError):
        logger.warning(
            "%s %s → %d %s", request.method, request.url.path, exc.status_code, exc.message
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Frozen configuration for this process. Built from the
                  environment when omitted.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="StarterKit API",
        description="Example CRUD and health endpoints backing a single-page application.",
        version=__version__,
        middleware=[middleware for _, middleware in build_middleware_stack(settings)],
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    api_base = settings.api_base_url
    app.include_router(health.router, prefix=api_base)
    app.include_router(users.router, prefix=api_base)
    app.include_router(protected.router, prefix=api_base)
    app.include_router(fallback.api_fallback_router, prefix=api_base)

    if settings.is_production:
        app.include_router(fallback.spa_router)
    else:
        app.include_router(fallback.dev_router)

    return app
