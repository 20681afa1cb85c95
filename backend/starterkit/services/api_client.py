"""
StarterKit — Frontend API Client
==================================

What:  Typed async client for the StarterKit HTTP API.
How:   One generic `request()` method issues the call with httpx, checks the
       status and decodes JSON; four thin wrappers pin endpoint, method and
       body and validate the result into the shared Pydantic schemas.
Who:   Frontend tooling, scripts and integration tests.

Base URL:
    development  http://localhost:3001/api/v1
    production   <origin>/api/v1   (same origin as the served bundle)

Failure handling:
    Any failure (non-2xx status, transport error, undecodable JSON) is logged
    and re-raised unchanged. A non-2xx status raises ApiRequestError carrying
    the numeric status. There is no retry and no caching.

Example:
    async with ApiService() as api:
        health = await api.health_check()
        user = await api.create_user({"name": "Ada", "email": "ada@x.com"})
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from starterkit.schemas.api import HealthStatus, ProtectedData, User, UserCreate

logger = logging.getLogger(__name__)

API_PATH = "/api/v1"
DEV_API_BASE_URL = "http://localhost:3001" + API_PATH
DEFAULT_HEADERS = {"Content-Type": "application/json"}


def resolve_base_url(production: bool, origin: str = "") -> str:
    """Base URL for the API: same-origin in production, the dev server otherwise."""
    if production:
        return origin.rstrip("/") + API_PATH
    return DEV_API_BASE_URL


class ApiRequestError(Exception):
    """The server answered with a status outside the 2xx range."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP error! status: {status_code}")


class ApiService:
    """
    Stateless wrapper around the StarterKit HTTP API.

    Args:
        base_url:  API base, e.g. `http://localhost:3001/api/v1`. Defaults to
                   the development server.
        transport: Optional httpx transport (ASGITransport, MockTransport).
        timeout:   Passed to httpx. None disables timeouts.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or DEV_API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(transport=transport, timeout=timeout)

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> Any:
        """
        Issue a request against `base_url + endpoint` and return the decoded JSON.

        Caller headers are merged over the default `Content-Type: application/json`.
        Extra keyword arguments (`json`, `content`, `params`, ...) go to httpx.

        Raises:
            ApiRequestError: status outside 200-299.
            httpx.HTTPError: transport-level failure.
            ValueError: body is not valid JSON.
        """
        url = f"{self.base_url}{endpoint}"
        merged_headers: Dict[str, str] = {**DEFAULT_HEADERS, **(headers or {})}

        try:
            response = await self._client.request(method, url, headers=merged_headers, **options)

            if not response.is_success:
                raise ApiRequestError(response.status_code)

            return response.json()
        except Exception as e:
            logger.error("API request failed: %s", e)
            raise

    # ── Health check ──────────────────────────────────────────────────────
    async def health_check(self) -> HealthStatus:
        return HealthStatus.model_validate(await self.request("/health"))

    # ── User endpoints ────────────────────────────────────────────────────
    async def get_users(self) -> List[User]:
        return [User.model_validate(item) for item in await self.request("/users")]

    async def create_user(self, user_data: Union[UserCreate, Mapping[str, Any]]) -> User:
        if isinstance(user_data, UserCreate):
            payload = user_data.model_dump()
        else:
            payload = dict(user_data)
        return User.model_validate(await self.request("/users", method="POST", json=payload))

    # ── Protected endpoint example ────────────────────────────────────────
    async def get_protected_data(self, token: str) -> ProtectedData:
        data = await self.request("/protected", headers={"Authorization": f"Bearer {token}"})
        return ProtectedData.model_validate(data)


# Default instance targeting the development server
api_service = ApiService()
