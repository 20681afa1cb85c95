"""
StarterKit Backend — Fallback Routes
======================================

What:  Everything a request falls through to after the API routes.

    api_fallback_router   any method on {apiBase} or {apiBase}/* → 404 JSON
    spa_router            production: static bundle file, else the SPA entry document
    dev_router            non-production: GET / answers with a JSON banner

How:   `create_app()` includes `api_fallback_router` right after the API
       routers (same prefix), then exactly one of `spa_router` / `dev_router`.
       Route order decides precedence, so the API catch-all always shadows
       the SPA fallback for API paths.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from starterkit.config import Settings, get_settings_dep
from starterkit.exceptions import NotFoundError
from starterkit.routes.base import LenientAPIRoute
from starterkit.schemas.api import DevBanner

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# ── API 404 ───────────────────────────────────────────────────────────────
api_fallback_router = APIRouter(include_in_schema=False, route_class=LenientAPIRoute)


@api_fallback_router.api_route("", methods=ALL_METHODS)
@api_fallback_router.api_route("/{path:path}", methods=ALL_METHODS)
async def api_not_found(path: str = "") -> None:
    raise NotFoundError(context={"path": path})


# ── Production: static bundle + SPA fallback ──────────────────────────────
spa_router = APIRouter(include_in_schema=False)


def resolve_static_file(static_root: Path, requested: str) -> Path:
    """
    Map a request path onto the bundle directory.

    Returns the file itself when it exists inside `static_root`, otherwise the
    SPA entry document (`index.html`) so the client-side router can resolve
    the path. Paths escaping `static_root` (`../`) fall back to the entry
    document as well.
    """
    root = static_root.resolve()
    if requested:
        candidate = (root / requested).resolve()
        if root in candidate.parents and candidate.is_file():
            return candidate
    return root / "index.html"


@spa_router.api_route("/{full_path:path}", methods=["GET", "HEAD"])
async def serve_spa(
    full_path: str,
    settings: Settings = Depends(get_settings_dep),
) -> FileResponse:
    target = resolve_static_file(Path(settings.static_dir), full_path)
    if not target.is_file():
        logger.error("SPA entry document missing: %s", target)
        raise HTTPException(status_code=404)
    return FileResponse(target)


# ── Development: JSON banner ──────────────────────────────────────────────
dev_router = APIRouter(include_in_schema=False)


@dev_router.get("/", response_model=DevBanner)
async def dev_banner(settings: Settings = Depends(get_settings_dep)) -> DevBanner:
    return DevBanner(
        message="Development server running",
        api_base=settings.api_base_url,
        frontend=settings.frontend_url,
    )
