"""
Configuration and settings for the portfolio content service.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_REMOTE_URL = "postgresql://placeholder.invalid:5432/portfolio"
PLACEHOLDER_REMOTE_KEY = "placeholder-key"


class Settings(BaseSettings):
    """Environment-backed settings, read from `PORTFOLIO_*` variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_prefix: str = Field(default="/api")

    # Remote database (Postgres expected). The key is used as the database
    # password when the URL does not carry one.
    remote_url: str = Field(default=PLACEHOLDER_REMOTE_URL)
    remote_key: str = Field(default=PLACEHOLDER_REMOTE_KEY)
    remote_create_schema: bool = Field(default=True)

    # On-device storage used when the remote backend is unavailable
    local_storage_dir: str = Field(default="data/local_storage")

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)
    migrate_on_startup: bool = Field(default=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
