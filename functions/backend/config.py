"""
Configuration and settings for the portfolio backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings shared by the REST service and the callable functions."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    environment: str = Field(default="development")

    # Relational store for the REST surface (Postgres expected)
    database_url: Optional[str] = Field(default=None)

    # HTTP server
    cors_origin: str = Field(default="http://localhost:3000")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    # Firebase Storage bucket; None selects the project's default bucket.
    storage_bucket: Optional[str] = Field(default=None)
    # Lifetime of issued image URLs.
    signed_url_expiry_year: int = Field(default=2500)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)
    use_firebase_auth: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
