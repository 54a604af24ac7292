"""
Configuration and settings for the golinks service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_prefix="GOLINKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8067)

    api_prefix: str = Field(default="/api")

    # Database (any SQLAlchemy URL, Postgres expected in production)
    database_url: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Wall-clock budget for a single store lookup.
    lookup_timeout_seconds: float = Field(default=60.0, gt=0)
    # Threads available for store lookups, including ones still stuck on a
    # lookup whose request already timed out.
    lookup_workers: int = Field(default=64, ge=1)

    admin: bool = Field(default=False)
    version: str = Field(default="dev")

    # When set, /api, /edit, /links and /admin require this bearer token.
    api_token: Optional[str] = Field(default=None)

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
