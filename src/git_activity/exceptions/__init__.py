"""Exception hierarchy for git-activity."""

from .analysis import AnalysisError, RenderError, RepositoryAccessError
from .base import GitActivityError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidDateRangeError,
    InvalidPathError,
)

__all__ = [
    "GitActivityError",
    "AnalysisError",
    "RepositoryAccessError",
    "RenderError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidDateRangeError",
    "InvalidPathError",
]
