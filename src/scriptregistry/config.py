"""Script Registry configuration.

Created: 2026-10-12

Settings are read from the environment (prefix ``SCRIPT_REGISTRY_``) and an
optional ``.env`` file, e.g. ``SCRIPT_REGISTRY_API_BASE_URL``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Script Registry client settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCRIPT_REGISTRY_",
        env_file=".env",
        extra="ignore",
    )

    api_base_url: str = Field(
        default="http://localhost:2990/jira/rest/my-groovy/latest",
        description="Base URL of the registry REST API",
    )
    request_timeout: float = Field(default=15.0, gt=0, description="HTTP timeout in seconds")
    filter_min_length: int = Field(
        default=2, ge=1, description="Shortest filter text that activates filtering"
    )
    directory_name_max_length: int = Field(default=32, ge=1)
    script_name_max_length: int = Field(default=25, ge=1)
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings (for testing)."""
    get_settings.cache_clear()
