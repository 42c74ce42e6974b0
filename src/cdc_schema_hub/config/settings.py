"""
Configuration management for CDC Schema Hub.

This module provides environment-based configuration using Pydantic BaseSettings,
so the schema registry endpoint, topic prefix and logging can be set per
deployment without code changes.

Environment variables use the CDC_ prefix (e.g. CDC_SCHEMA_REGISTRY_URL).
LOG_LEVEL is read without a prefix.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("CDC_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Defaults target a local development registry. In production set at least
    CDC_SCHEMA_REGISTRY_URL and CDC_TOPIC_PREFIX.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    # Schema registry configuration
    schema_registry_url: str = Field(
        default="http://localhost:8081",
        description="Base URL of the Confluent-compatible schema registry",
    )
    schema_registry_timeout: float = Field(
        default=10.0, description="Schema registry request timeout in seconds"
    )
    schema_registry_max_cached_schemas: int = Field(
        default=1000,
        description="Maximum number of schemas the HTTP client keeps by id",
    )

    # Topic naming
    topic_prefix: str = Field(
        default="",
        description="Prefix prepended to <keyspace>.<table> when naming topics",
    )

    # Table definitions consumed by the CLI
    tables_file: Optional[str] = Field(
        default=None, description="Path to a YAML file of table definitions"
    )

    @field_validator("schema_registry_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("schema_registry_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("schema_registry_timeout must be positive")
        return value

    model_config = SettingsConfigDict(
        env_prefix="CDC_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
