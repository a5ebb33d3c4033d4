"""
Configuration Management.

Loads secrets from the environment (or a .env file in the working directory)
and settings from config/settings/*.yaml shipped inside the package.
No hardcoded values in code; all configuration comes from these sources.

Secrets (environment / .env):
    CDN77_API_TOKEN

Settings (YAML):
    application.yaml   - App identity, API base URL, user agent, timeout
    logging.yaml       - Logging configuration

The settings directory can be replaced as a whole by pointing
CDN77_CLIENT_CONFIG_DIR at another directory with the same files.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cdn77_client.core.config_schema import ApplicationSchema, LoggingSchema
from cdn77_client.core.exceptions import ConfigurationError

CONFIG_DIR_ENV_VAR = "CDN77_CLIENT_CONFIG_DIR"

_PACKAGE_SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


def find_config_dir() -> Path:
    """Return the settings directory, honouring the CDN77_CLIENT_CONFIG_DIR override."""
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override)
    return _PACKAGE_SETTINGS_DIR


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from the settings directory."""
    config_path = find_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from the environment or .env. Only tokens."""

    api_token: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="CDN77_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance."""
    return Settings()


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def resolve_api_token(explicit_token: str | None = None) -> str:
    """
    Resolve the API token.

    The explicit value (from the --api-token flag) wins; otherwise the
    CDN77_API_TOKEN environment variable or .env entry is used.

    The token is sent in the Authorization header, so it must be printable
    ASCII.

    Raises:
        ConfigurationError: If neither source provides a non-empty token, or
            the token cannot be sent as a header value
    """
    token = explicit_token or get_settings().api_token
    if not token:
        raise ConfigurationError(
            "No API token detected, please specify one either in the arguments or via env"
        )

    if not (token.isascii() and token.isprintable()):
        raise ConfigurationError(
            "The API token contains invalid characters, only printable ASCII is allowed"
        )
    return token


def get_api_settings() -> tuple[str, float, str]:
    """
    Get the API base URL, timeout and user agent from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds, user_agent).
    """
    api = get_app_config().application.api
    return api.base_url, float(api.timeout), api.user_agent
