#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MoodGrid - Server Configuration
Settings for the import/export service

The bind address and port come from a JSON file (`conf.json` by default,
keys `hostname` and `port`); environment variables prefixed with
`MOODGRID_` fill in anything the file leaves out. A missing file or a
missing bind address is a fatal startup error.

Version: 1.0.0
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("conf.json")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# keys accepted in the config file besides the field names themselves
FILE_KEYS = {
    "hostname": "DASHBOARD_HOST",
    "port": "DASHBOARD_PORT",
}


class ConfigError(Exception):
    """The server configuration is missing or invalid"""
    pass


class DashboardSettings(BaseSettings):
    """Settings of the MoodGrid service"""

    model_config = SettingsConfigDict(env_prefix="MOODGRID_", extra="ignore")

    # ===== BASICS =====

    APP_NAME: str = Field(
        default="MoodGrid",
        description="Service name"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Service version"
    )

    ENVIRONMENT: str = Field(
        default="production",
        description="Environment (development/production/testing)"
    )

    DEBUG: bool = Field(
        default=False,
        description="Debug mode, enables the API docs"
    )

    # ===== NETWORK =====

    DASHBOARD_HOST: str = Field(
        ...,
        description="Bind address"
    )

    DASHBOARD_PORT: int = Field(
        ...,
        ge=1,
        le=65535,
        description="Bind port"
    )

    ALLOWED_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # ===== PATHS =====

    DATA_DIR: Path = Field(
        default=Path("db_data"),
        description="Directory holding one JSON file per month"
    )

    LOGS_DIR: Path = Field(
        default=Path("logs"),
        description="Directory for log files"
    )

    # ===== LOGGING =====

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format"
    )

    LOG_TO_FILE: bool = Field(
        default=True,
        description="Also write logs to LOGS_DIR"
    )

    @field_validator('LOG_LEVEL')
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f'LOG_LEVEL must be one of {", ".join(LOG_LEVELS)}')
        return level

    @field_validator('DASHBOARD_HOST')
    def validate_host(cls, v):
        if not v.strip():
            raise ValueError('DASHBOARD_HOST must not be empty')
        return v.strip()

    @property
    def log_file(self) -> Optional[Path]:
        return self.LOGS_DIR / "moodgrid.log" if self.LOG_TO_FILE else None


def _file_values(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {FILE_KEYS.get(key, key.upper()): value for key, value in raw.items()}


def load_settings(config_path: Optional[Union[str, Path]] = None) -> DashboardSettings:
    """Read the config file and build the settings, raising ConfigError on any problem."""
    path = Path(config_path or os.getenv("MOODGRID_CONFIG", DEFAULT_CONFIG_PATH))

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"could not find config at '{path}'")
    except json.JSONDecodeError as e:
        raise ConfigError(f"config at '{path}' is not valid JSON: {e}")

    if not isinstance(raw, dict):
        raise ConfigError(f"config at '{path}' must be a JSON object")

    try:
        return DashboardSettings(**_file_values(raw))
    except ValidationError as e:
        raise ConfigError(f"invalid config at '{path}': {e}") from e
