"""
Configuration — operational settings loaded from environment/.env.

Uses pydantic-settings so invalid values are rejected at startup, before any
argument parsing or network activity. These settings tune how the tool runs
(log verbosity, HTTP timeout); what it fetches and where it writes comes from
the command line only.

Environment variables use the ADFS_CERT_EXTRACT_ prefix:
  ADFS_CERT_EXTRACT_LOG_LEVEL=INFO
  ADFS_CERT_EXTRACT_HTTP_TIMEOUT_SECONDS=30
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load the same way whatever the working directory is.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ADFS_CERT_EXTRACT_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", description="structlog filtering level")
    http_timeout_seconds: int = Field(default=60, ge=1, description="Metadata request timeout")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level
