"""
StarterKit — Development Proxy
================================

What:  Local development front door on the dev-server port (5173).
How:   Requests whose path matches a proxy rule of the build configuration
       (`/api` by default) are forwarded with httpx to the rule's target;
       every other path is served from a static root with `index.html`
       fallback, the same way production serves the bundle.
Who:   `python -m starterkit dev-proxy`.

Forwarding rules:
    - method, path, query string and body are passed through unchanged
    - with `change_origin` the upstream sees its own Host, otherwise the client's
    - hop-by-hop headers are dropped in both directions
    - an unreachable upstream answers 502 {"error": "Bad gateway"}
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional, Union

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse, Response

from starterkit.build_config import FrontendBuildConfig, ProxyRule
from starterkit.routes.fallback import ALL_METHODS, resolve_static_file

logger = logging.getLogger(__name__)

HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}

# httpx already decoded the body, so the upstream's framing no longer applies
_STRIPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-encoding", "content-length"}


def _forward_headers(request: Request, rule: ProxyRule) -> dict:
    headers = {
        name: value
        for name, value in request.headers.items()
        if name not in HOP_BY_HOP_HEADERS and name != "content-length"
    }
    if rule.change_origin:
        headers.pop("host", None)
    return headers


async def forward_request(
    client: httpx.AsyncClient, request: Request, rule: ProxyRule
) -> Response:
    """Send `request` to `rule.target` and relay the upstream response."""
    url = rule.target.rstrip("/") + request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"

    try:
        upstream = await client.request(
            request.method,
            url,
            headers=_forward_headers(request, rule),
            content=await request.body(),
        )
    except httpx.TransportError as e:
        logger.error("Proxy error for %s %s → %s: %s", request.method, request.url.path, url, e)
        return JSONResponse(status_code=502, content={"error": "Bad gateway"})

    headers = {
        name: value
        for name, value in upstream.headers.items()
        if name.lower() not in _STRIPPED_RESPONSE_HEADERS
    }
    return Response(content=upstream.content, status_code=upstream.status_code, headers=headers)


def create_dev_proxy_app(
    config: Optional[FrontendBuildConfig] = None,
    static_root: Optional[Union[str, Path]] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the development proxy application.

    Args:
        config:      Build configuration holding the proxy rules. Defaults apply when omitted.
        static_root: Directory served for non-proxied paths. Without one, those paths are 404.
        transport:   Optional httpx transport for the upstream client.
    """
    config = config or FrontendBuildConfig()
    root = Path(static_root) if static_root is not None else None
    client = httpx.AsyncClient(transport=transport, timeout=None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        for prefix, rule in config.dev_server.proxy.items():
            logger.info("Proxying %s → %s", prefix, rule.target)
        yield
        await client.aclose()

    app = FastAPI(
        title="StarterKit Dev Proxy",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.http_client = client

    @app.api_route("/{path:path}", methods=ALL_METHODS)
    async def dispatch(request: Request, path: str) -> Response:
        rule = config.proxy_rule_for(request.url.path)
        if rule is not None:
            return await forward_request(client, request, rule)

        if root is not None and request.method in ("GET", "HEAD"):
            target = resolve_static_file(root, path)
            if target.is_file():
                return FileResponse(target)

        return JSONResponse(status_code=404, content={"error": "Not Found"})

    return app
