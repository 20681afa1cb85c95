"""
StarterKit Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   Route handlers declare them as response models; the API client
       validates decoded JSON into the same models.
Who:   Routes (server side) and `ApiService` (client side).

Wire format:
    Field names are camelCase on the wire (`createdAt`), snake_case in Python.
    Timestamps are UTC ISO-8601 strings with millisecond precision and a `Z`
    suffix, e.g. `2024-01-15T12:00:00.000Z`.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """Current UTC time as `YYYY-MM-DDTHH:MM:SS.mmmZ`."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ══════════════════════════════════════════════════════════════════════════
# Users
# ══════════════════════════════════════════════════════════════════════════


class User(BaseModel):
    """
    What:  A user record. Never stored; built per request.
    Who:   Returned by GET/POST {apiBase}/users.

    `created_at` is only present on users created through POST; the
    fabricated sample users carry no timestamp.
    """
    id: int = Field(description="Millisecond timestamp for created users, 1/2 for samples")
    name: str
    email: str
    created_at: Optional[str] = Field(
        default=None,
        alias="createdAt",
        description="Creation time (UTC ISO 8601), absent on sample users",
    )

    model_config = ConfigDict(populate_by_name=True)


class UserCreate(BaseModel):
    """Request body for POST {apiBase}/users, as sent by the API client."""
    name: str
    email: str


# ══════════════════════════════════════════════════════════════════════════
# Health & Protected
# ══════════════════════════════════════════════════════════════════════════


class HealthStatus(BaseModel):
    """
    What:  Liveness report computed fresh on every call.
    Who:   Returned by GET {apiBase}/health.
    """
    status: str = Field(description="Always 'OK' while the process can answer")
    timestamp: str = Field(description="Server time (UTC ISO 8601)")
    environment: Optional[str] = Field(default=None, description="Raw NODE_ENV value")
    version: str = Field(description="Application version")


class ProtectedData(BaseModel):
    message: str
    timestamp: str


class DevBanner(BaseModel):
    """Answer to GET / outside production."""
    message: str
    api_base: str = Field(alias="apiBase")
    frontend: str

    model_config = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failure path.

    Example:
        {"error": "Name and email are required"}

    `stack` is only filled for unhandled errors outside production.
    """
    error: str = Field(description="Human-readable error description")
    stack: Optional[str] = Field(default=None, description="Traceback (non-production only)")
