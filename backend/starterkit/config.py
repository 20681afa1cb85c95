"""
StarterKit Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and returns a frozen `Settings` object.
Who:   Built once at process entry (CLI or `starterkit.main`) and handed to
       `create_app()`; handlers reach it through `get_settings_dep`.
When:  Constructed exactly once per process; never re-read mid-process.

Environment variables:
    PORT           HTTP port (default 3000)
    NODE_ENV       "production" switches on the production behaviors
    CORS_ORIGIN    The single origin allowed by CORS (default http://localhost:5173)
    API_BASE_URL   Mount point of the JSON API (default /api/v1)
"""

import logging
from typing import Optional

from fastapi import Request
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development. The instance
    is frozen: assigning to a field after construction raises.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # What: Raw NODE_ENV value, echoed by the health endpoint
    # None when the variable is unset
    node_env: Optional[str] = Field(default=None)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origin: str = Field(default="http://localhost:5173")

    # ── API ───────────────────────────────────────────────────────────────
    api_base_url: str = Field(default="/api/v1")

    # What: Upper bound for JSON and URL-encoded request bodies
    # Default: 10MB = 10 * 1024 * 1024 = 10485760
    max_body_size: int = Field(default=10_485_760, ge=1)

    # ── Frontend ──────────────────────────────────────────────────────────
    # What: Directory holding the prebuilt SPA bundle (served in production)
    static_dir: str = Field(default="dist")

    # What: Where the frontend dev server lives, advertised by the dev banner
    frontend_url: str = Field(default="http://localhost:5173")

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("api_base_url")
    @classmethod
    def normalize_api_base_url(cls, v: str) -> str:
        """`api/v1/` and `/api/v1` both become `/api/v1`."""
        stripped = v.strip().strip("/")
        if not stripped:
            raise ValueError("api_base_url must not be empty or '/'")
        return "/" + stripped

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def get_settings() -> Settings:
    """Build settings from the current environment. Call once at process entry."""
    return Settings()


def get_settings_dep(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was created with."""
    return request.app.state.settings
