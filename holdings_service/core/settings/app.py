"""HTTP application settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """Settings for the FastAPI app and its uvicorn entry point.

    Environment variables use APP_ prefix.
    Example: APP_PORT=9000, APP_API_PREFIX=/api/v2, APP_DOCS_ENABLED=false
    """

    service_name: str = Field(
        default="holdings-service",
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Name stamped on startup and shutdown log records",
    )
    title: str = Field(default="Token Holdings API", min_length=1)
    version: str = Field(default="0.1.0", pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$")
    environment: Environment = "development"
    debug: bool = False

    api_prefix: str = Field(
        default="/api/v1",
        pattern=r"^/[^\s]*[^/\s]$",
        description="Prefix for the holdings and token listing routes, no trailing slash",
    )
    docs_enabled: bool = Field(
        default=True,
        description="Serve OpenAPI docs at /docs and the schema at /openapi.json",
    )

    host: str = Field(default="0.0.0.0", min_length=1, description="uvicorn bind host")
    port: int = Field(default=8000, ge=1, le=65535, description="uvicorn bind port")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
