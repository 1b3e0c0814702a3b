"""Runtime configuration for issueboard.

Settings are read from ``ISSUEBOARD_*`` environment variables (and an optional
``.env`` file) by pydantic-settings. Anything not set falls back to the
defaults below.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ENV_PREFIX = "ISSUEBOARD_"

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_OWNER = "your-org"
DEFAULT_REPO = "kanban"
DEFAULT_STORE_PATH = "issueboard.db"
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    """Invalid configuration value."""


class SessionMode(StrEnum):
    """Where the session credentials live."""

    CLIENT = "client"  # local persistent key-value store
    SERVER = "server"  # HTTP-only cookies


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    session_mode: SessionMode = SessionMode.SERVER
    api_url: str = DEFAULT_API_URL
    default_owner: str = DEFAULT_OWNER
    default_repo: str = DEFAULT_REPO
    default_name: str = ""
    store_path: str = DEFAULT_STORE_PATH
    cookie_secure: bool = True
    timeout: float = DEFAULT_TIMEOUT
    # Browser origins allowed to call the API besides its own; empty disables CORS
    cors_origins: Annotated[list[str], NoDecode] = []
    log_dir: str = "logs"
    log_level: str = "INFO"

    @field_validator("session_mode", mode="before")
    @classmethod
    def _lowercase_mode(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip().rstrip("/") for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _uppercase_level(cls, value: str) -> str:
        return value.upper()


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment, with explicit overrides on top.

    Overrides that are None are ignored, so unset CLI options fall through to
    the environment.

    Raises:
        ConfigError: If a variable holds a value that cannot be parsed.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{ENV_PREFIX}{str(error['loc'][0]).upper()}: {error['msg']}"
            for error in e.errors()
            if error["loc"]
        )
        raise ConfigError(problems or str(e)) from e
