"""
StarterKit Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── dev_settings:   Settings for a non-production process
    ├── static_bundle:  Temporary prebuilt SPA bundle (index.html + one asset)
    ├── prod_settings:  Production Settings serving `static_bundle`
    ├── dev_app / prod_app:        FastAPI apps built from those settings
    └── client / prod_client:      HTTPX AsyncClients talking to the apps in-process
"""

import os

# Settings the CLI tests build from the environment stay quiet and host-independent
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("API_BASE_URL", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from starterkit.config import Settings
from starterkit.main import create_app

INDEX_HTML = "<!doctype html><html><body><div id=\"root\"></div></body></html>"
ASSET_JS = "console.log('bundle');"


def make_client(app) -> AsyncClient:
    """
    HTTPX AsyncClient routed straight into `app`.

    raise_app_exceptions=False lets tests observe the 500 response produced
    by the catch-all handler instead of the re-raised exception.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(_env_file=None, node_env="development", log_level="WARNING")


@pytest.fixture
def static_bundle(tmp_path):
    """A minimal prebuilt frontend: dist/index.html and dist/assets/app.js."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (dist / "assets" / "app.js").write_text(ASSET_JS, encoding="utf-8")
    return dist


@pytest.fixture
def prod_settings(static_bundle) -> Settings:
    return Settings(
        _env_file=None,
        node_env="production",
        static_dir=str(static_bundle),
        log_level="WARNING",
    )


@pytest.fixture
def dev_app(dev_settings):
    return create_app(dev_settings)


@pytest.fixture
def prod_app(prod_settings):
    return create_app(prod_settings)


@pytest_asyncio.fixture
async def client(dev_app):
    """
    Async HTTP client for the development app.

    Usage:
        async def test_health(client):
            response = await client.get("/api/v1/health")
            assert response.status_code == 200
    """
    async with make_client(dev_app) as http:
        yield http


@pytest_asyncio.fixture
async def prod_client(prod_app):
    async with make_client(prod_app) as http:
        yield http


@pytest.fixture
def client_for():
    """Factory fixture: `async with client_for(app) as http: ...` for ad-hoc apps."""
    return make_client
