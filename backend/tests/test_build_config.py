"""
StarterKit — Build Configuration & Dev Proxy Tests
====================================================

Test Strategy:
    ✅ Defaults: base, output/asset dirs, sourcemap off, manual chunks, dev server
    ✅ Module → chunk lookup
    ✅ Proxy prefix matching on segment boundaries
    ✅ Bundler-shaped rendering
    ✅ JSON overrides
    ✅ Dev proxy forwards /api (method, path, query, body) and serves the bundle otherwise
    ✅ Unreachable upstream → 502
"""

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError

from starterkit.build_config import (
    DevServerConfig,
    FrontendBuildConfig,
    ProxyRule,
    load_build_config,
)
from starterkit.dev_proxy import create_dev_proxy_app


class TestDefaults:

    def test_build_defaults(self):
        config = FrontendBuildConfig()

        assert config.base == "/"
        assert config.out_dir == "dist"
        assert config.assets_dir == "assets"
        assert config.sourcemap is False

    def test_manual_chunks(self):
        assert FrontendBuildConfig().manual_chunks == {
            "vendor": ["react", "react-dom"],
            "router": ["react-router-dom"],
        }

    def test_dev_server(self):
        dev_server = FrontendBuildConfig().dev_server

        assert dev_server.port == 5173
        assert dev_server.proxy == {
            "/api": ProxyRule(target="http://localhost:3001", change_origin=True)
        }

    def test_out_dir_matches_server_static_dir(self, dev_settings):
        assert FrontendBuildConfig().out_dir == dev_settings.static_dir


class TestChunkFor:

    @pytest.mark.parametrize(
        "module_id, chunk",
        [
            ("react", "vendor"),
            ("react-dom", "vendor"),
            ("react-router-dom", "router"),
            ("lodash", None),
            ("./src/App", None),
        ],
    )
    def test_lookup(self, module_id, chunk):
        assert FrontendBuildConfig().chunk_for(module_id) == chunk


class TestProxyRuleFor:

    @pytest.mark.parametrize("path", ["/api", "/api/v1/users", "/api/"])
    def test_api_paths_proxied(self, path):
        rule = FrontendBuildConfig().proxy_rule_for(path)
        assert rule is not None
        assert rule.target == "http://localhost:3001"

    @pytest.mark.parametrize("path", ["/", "/apiary", "/dashboard", "/assets/app.js"])
    def test_other_paths_not_proxied(self, path):
        assert FrontendBuildConfig().proxy_rule_for(path) is None

    def test_longest_prefix_wins(self):
        config = FrontendBuildConfig(
            dev_server=DevServerConfig(
                proxy={
                    "/api": ProxyRule(target="http://a"),
                    "/api/v2": ProxyRule(target="http://b"),
                }
            )
        )

        assert config.proxy_rule_for("/api/v2/users").target == "http://b"
        assert config.proxy_rule_for("/api/v1/users").target == "http://a"


class TestViteOptions:

    def test_rendering(self):
        assert FrontendBuildConfig().to_vite_options() == {
            "base": "/",
            "build": {
                "outDir": "dist",
                "assetsDir": "assets",
                "sourcemap": False,
                "rollupOptions": {
                    "output": {
                        "manualChunks": {
                            "vendor": ["react", "react-dom"],
                            "router": ["react-router-dom"],
                        }
                    }
                },
            },
            "server": {
                "port": 5173,
                "proxy": {"/api": {"target": "http://localhost:3001", "changeOrigin": True}},
            },
        }


class TestLoadBuildConfig:

    def test_without_path_returns_defaults(self):
        assert load_build_config() == FrontendBuildConfig()

    def test_overrides_from_file(self, tmp_path):
        path = tmp_path / "build.json"
        path.write_text(
            json.dumps({"out_dir": "public", "sourcemap": True, "dev_server": {"port": 4000}}),
            encoding="utf-8",
        )

        config = load_build_config(path)

        assert config.out_dir == "public"
        assert config.sourcemap is True
        assert config.dev_server.port == 4000
        assert config.assets_dir == "assets"
        assert config.dev_server.proxy["/api"].target == "http://localhost:3001"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_build_config(tmp_path / "nope.json")

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "build.json"
        path.write_text(json.dumps({"dev_server": {"port": "many"}}), encoding="utf-8")

        with pytest.raises(ValidationError):
            load_build_config(path)


# ══════════════════════════════════════════════════════════════════════════
# Development proxy
# ══════════════════════════════════════════════════════════════════════════


class Upstream:
    """Fake API server behind the proxy."""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            201,
            json={"seen": request.url.path},
            headers={"X-Upstream": "yes", "Connection": "close"},
        )


def _proxy_client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://frontend.test")


class TestDevProxy:

    @pytest.mark.asyncio
    async def test_forwards_api_requests(self):
        upstream = Upstream()
        app = create_dev_proxy_app(transport=httpx.MockTransport(upstream))

        async with _proxy_client(app) as http:
            response = await http.post(
                "/api/v1/users?page=2", json={"name": "Ada", "email": "ada@x.com"}
            )

        assert response.status_code == 201
        assert response.json() == {"seen": "/api/v1/users"}
        assert response.headers["x-upstream"] == "yes"
        assert "connection" not in response.headers

        sent = upstream.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "http://localhost:3001/api/v1/users?page=2"
        assert json.loads(sent.content) == {"name": "Ada", "email": "ada@x.com"}

    @pytest.mark.asyncio
    async def test_change_origin_rewrites_host(self):
        upstream = Upstream()
        app = create_dev_proxy_app(transport=httpx.MockTransport(upstream))

        async with _proxy_client(app) as http:
            await http.get("/api/v1/health")

        assert upstream.requests[0].headers["host"] == "localhost:3001"

    @pytest.mark.asyncio
    async def test_host_kept_without_change_origin(self):
        upstream = Upstream()
        config = FrontendBuildConfig(
            dev_server=DevServerConfig(
                proxy={"/api": ProxyRule(target="http://localhost:3001", change_origin=False)}
            )
        )
        app = create_dev_proxy_app(config, transport=httpx.MockTransport(upstream))

        async with _proxy_client(app) as http:
            await http.get("/api/v1/health")

        assert upstream.requests[0].headers["host"] == "frontend.test"

    @pytest.mark.asyncio
    async def test_unreachable_upstream_is_bad_gateway(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        app = create_dev_proxy_app(transport=httpx.MockTransport(refuse))

        async with _proxy_client(app) as http:
            response = await http.get("/api/v1/health")

        assert response.status_code == 502
        assert response.json() == {"error": "Bad gateway"}

    @pytest.mark.asyncio
    async def test_serves_bundle_for_other_paths(self, static_bundle):
        upstream = Upstream()
        app = create_dev_proxy_app(
            static_root=static_bundle, transport=httpx.MockTransport(upstream)
        )

        async with _proxy_client(app) as http:
            asset = await http.get("/assets/app.js")
            page = await http.get("/dashboard")

        assert asset.text == (static_bundle / "assets" / "app.js").read_text(encoding="utf-8")
        assert page.text == (static_bundle / "index.html").read_text(encoding="utf-8")
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_not_found_without_static_root(self):
        upstream = Upstream()
        app = create_dev_proxy_app(transport=httpx.MockTransport(upstream))

        async with _proxy_client(app) as http:
            response = await http.get("/apiary")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
        assert upstream.requests == []
