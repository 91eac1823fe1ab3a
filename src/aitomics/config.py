"""Configuration module for aitomics.

This module provides Pydantic models for the text-generation backend settings,
loading them from environment variables, an optional .env file and an optional
``aitomics.yml`` file.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from aitomics.exceptions import ConfigurationError

ENV_PREFIX = "AITOMICS_"
DEFAULT_CONFIG_PATH = "aitomics.yml"
LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class GenerationSettings(BaseModel):
    """Sampling settings sent with every chat-completion request."""

    temperature: float = Field(0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(1024, gt=0)
    stream: bool = False


class FetcherSettings(BaseSettings):
    """Settings for the chat-completion backend (LM Studio by default)."""

    model: str = "llama-3.2-3b-instruct"
    path: str = "http://localhost"
    port: int = Field(1234, gt=0, le=65535)
    endpoint: str = "v1/chat/completions"
    settings: GenerationSettings = Field(default_factory=GenerationSettings)

    request_timeout_seconds: int = Field(
        60,
        gt=0,
        description="Timeout for backend requests in seconds.",
    )

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("path")
    def check_scheme(cls, v: str) -> str:  # pylint: disable=E0213
        """Require an http(s) base path without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"path must start with http:// or https:// (got '{v}')")
        return v.rstrip("/")

    @field_validator("endpoint")
    def strip_endpoint(cls, v: str) -> str:  # pylint: disable=E0213
        return v.strip("/")

    @field_validator("log_level")
    def normalize_log_level(cls, v: str) -> str:  # pylint: disable=E0213
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @property
    def url(self) -> str:
        """Full URL of the chat-completion endpoint."""
        return f"{self.path}:{self.port}/{self.endpoint}"


def load_settings(config_path: str | Path = DEFAULT_CONFIG_PATH) -> FetcherSettings:
    """Load settings from environment variables and a YAML file.

    Environment variables win over YAML values, which win over defaults.

    Returns:
        FetcherSettings: Validated settings instance.

    Raises:
        ConfigurationError: If the YAML file is not a mapping or a value fails
            validation.
    """
    yaml_data: Any = {}
    if os.path.exists(config_path):
        with open(config_path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    if not isinstance(yaml_data, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {config_path}", source=str(config_path)
        )

    # Only apply YAML values for keys NOT set by environment variables,
    # since init kwargs would otherwise take priority over the environment
    overrides = {
        key: value
        for key, value in yaml_data.items()
        if f"{ENV_PREFIX}{str(key).upper()}" not in os.environ
    }

    try:
        return FetcherSettings(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid backend configuration: {e}", source=str(config_path)
        ) from e


def get_settings() -> FetcherSettings:
    """Get settings instance.

    Prefer passing a FetcherSettings object explicitly to the components that
    need it; this helper exists for the defaults used when none is given.
    """
    return load_settings()
