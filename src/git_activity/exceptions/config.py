"""Configuration exceptions: bad flags, dates, files.

All of these are raised before any repository is opened.
"""

from datetime import date
from pathlib import Path
from typing import Any

from .base import GitActivityError


class ConfigurationError(GitActivityError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a provided path (alias file, config file) is unusable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is not one of the accepted values."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidDateRangeError(ConfigurationError):
    """Raised when the start date falls after the end date."""

    def __init__(self, start: date, end: date):
        super().__init__(
            "Start date cannot be after end date",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )
        self.start = start
        self.end = end
