"""Configuration loading and validation for git-activity.

Configuration sources are merged in priority order:
    1. Defaults (defined in ActivityConfig)
    2. Global config (~/.git-activity.toml)
    3. Project config (./git-activity.toml)
    4. Explicit config file
    5. Environment variables (GIT_ACTIVITY_* prefix)
    6. CLI overrides (passed as kwargs)

Every check here runs before any repository is opened, so a bad flag never
leaves half-written charts behind.

Example:
    >>> config = load_config(mode="lines", start="2024-01-01")
    >>> config.mode
    <Mode.LINES: 'lines'>
    >>> config.date_range.start
    datetime.date(2024, 1, 1)
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from datetime import date, datetime
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .activity.grouping import GroupBy
from .activity.models import DateRange, Mode
from .charts.render import SUPPORTED_FORMATS
from .exceptions import ConfigurationError, InvalidConfigError, InvalidPathError

Verbosity = Literal["quiet", "normal", "verbose"]

DATE_FORMAT = "%Y-%m-%d"
ENV_PREFIX = "GIT_ACTIVITY_"


def parse_date(value: str | date | None, key: str = "date") -> Optional[date]:
    """Parse ``YYYY-MM-DD``; empty or None means unbounded."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidConfigError(key, value, "expected YYYY-MM-DD") from None


@dataclass(frozen=True)
class ActivityConfig:
    """Settings for one analysis run.

    Attributes:
        mode: commits (one event per commit) or lines (added + deleted lines)
        group_by: flat, byRepository or byDeveloper series
        output_format: png or svg
        grouped: side-by-side normalized bars instead of stacked raw values
        start, end: optional date bounds
        people_file: alias file (``Name|alias|alias``)
        output_dir: where chart files are written
        git_timeout_seconds: limit for each git subprocess call
        verbosity: logging verbosity level
    """

    mode: Mode = Mode.COMMITS
    group_by: GroupBy = GroupBy.FLAT
    output_format: str = "png"
    grouped: bool = False
    start: Optional[date] = None
    end: Optional[date] = None
    people_file: Optional[str] = None
    output_dir: str = "."
    git_timeout_seconds: int = 60
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Normalize and validate; raises ConfigurationError subclasses."""
        object.__setattr__(self, "mode", Mode.parse(self.mode))

        object.__setattr__(self, "group_by", GroupBy.parse(self.group_by))

        fmt = str(self.output_format).lower()
        if fmt not in SUPPORTED_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, "supported formats are 'png' and 'svg'"
            )
        object.__setattr__(self, "output_format", fmt)

        object.__setattr__(self, "start", parse_date(self.start, "start"))
        object.__setattr__(self, "end", parse_date(self.end, "end"))
        # Raises InvalidDateRangeError when start > end
        DateRange(self.start, self.end)

        object.__setattr__(self, "grouped", _coerce("grouped", self.grouped, bool))
        object.__setattr__(
            self, "git_timeout_seconds", _coerce("git_timeout_seconds", self.git_timeout_seconds, int)
        )
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        if self.people_file is not None and not Path(self.people_file).is_file():
            raise InvalidPathError(Path(self.people_file), "alias file does not exist")

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start, self.end)


def load_config(config_file: Optional[Path] = None, **overrides) -> ActivityConfig:
    """Load configuration with auto-discovery and merging.

    Overrides whose value is None are ignored so unset CLI options do not
    mask file or environment settings.

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".git-activity.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "git-activity.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidPathError(config_file, "config file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ActivityConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    return ActivityConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GIT_ACTIVITY_* environment variables.

    e.g. GIT_ACTIVITY_MODE=lines, GIT_ACTIVITY_GROUPED=true,
    GIT_ACTIVITY_START=2024-01-01.
    """
    type_hints = get_type_hints(ActivityConfig)
    result: dict[str, Any] = {}

    for field_name in ActivityConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from None

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment string into the field's type."""
    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # Dates, enums and Literal strings are validated in __post_init__
    return value


def _load_toml_file(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e


def _coerce(key: str, value: Any, type_hint: type) -> Any:
    """Accept a value of ``type_hint`` or a string that parses to one."""
    if isinstance(value, str):
        try:
            value = _parse_env_value(value.strip(), type_hint)
        except ValueError as e:
            raise InvalidConfigError(key, value, str(e)) from None
    # bool is a subclass of int; neither may stand in for the other
    if type(value) is not type_hint:
        raise InvalidConfigError(key, value, f"expected {type_hint.__name__}")
    return value
