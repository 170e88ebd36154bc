"""Configuration management for turnbridge."""

from __future__ import annotations

import os
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__

API_KEY_ENV = "ANTHROPIC_API_KEY"
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 4096


class Settings(BaseSettings):
    """Bridge settings.

    Values stay mutable for the life of the process and are read each time a
    query is built, so setters take effect on the next call.
    """

    model_config = SettingsConfigDict(
        env_prefix="TURNBRIDGE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_key: str | None = Field(default=None, description="Explicit API key; falls back to ANTHROPIC_API_KEY")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier sent with every request")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, description="Maximum output tokens per response")

    # Endpoint Configuration
    api_host: str = Field(default="api.anthropic.com", description="HTTPS host of the messages API")
    api_path: str = Field(default="/v1/messages", description="Request path of the messages API")
    api_version: str = Field(default="2023-06-01", description="Value of the anthropic-version header")
    user_agent: str = Field(default=f"turnbridge/{__version__}", description="User-Agent header")
    timeout_seconds: float | None = Field(default=None, description="Socket timeout; None keeps the blocking default")

    @property
    def resolved_api_key(self) -> str:
        """Explicit key if set, else the environment key looked up now."""
        if self.api_key:
            return self.api_key
        return os.getenv(API_KEY_ENV, "")


def get_settings(**overrides: Any) -> Settings:
    """Get bridge settings.

    Args:
        overrides: Field values taking precedence over environment and .env

    Returns:
        Settings instance
    """
    return Settings(**overrides)
