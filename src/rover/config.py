"""
Configuration

Process-wide settings decided once at startup from CLI flags and the
environment, then passed explicitly to the pieces that need them.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

import click
from pydantic import BaseModel, ConfigDict, Field

APP_NAME = "rover"
FORMAT_ENV = "ROVER_FORMAT"
LOG_ENV = "ROVER_LOG"
CONFIG_HOME_ENV = "ROVER_CONFIG_HOME"
API_KEY_ENV = "ROVER_API_KEY"


class OutputFormat(StrEnum):
    """Rendering mode for command results"""

    PLAIN = "plain"
    JSON = "json"


class LogLevel(StrEnum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


def default_config_home() -> Path:
    return Path(click.get_app_dir(APP_NAME))


class Settings(BaseModel):
    """Resolved settings for one invocation"""

    model_config = ConfigDict(frozen=True)

    output_format: OutputFormat = OutputFormat.PLAIN
    log_level: LogLevel | None = None
    config_home: Path = Field(default_factory=default_config_home)

    @property
    def json_output(self) -> bool:
        return self.output_format == OutputFormat.JSON
