"""Application settings using Pydantic."""

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = Field(default="Session Flash")
    env: str = Field(default="dev")
    debug: bool = Field(default=True)
    secret_key: str = Field(default="change-me")
    session_max_age: int = Field(default=24 * 60 * 60)

    # Defaults applied to every flash message unless overridden at the call site
    flash_key: str = Field(default="flash")
    flash_element: str = Field(default="default")
    flash_type: str = Field(default="default")
    flash_clear: bool = Field(default=False)
    flash_duplicate: bool = Field(default=True)
    flash_params: dict[str, Any] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SF_",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
