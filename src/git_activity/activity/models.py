"""Data models for commit activity aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Iterator, Optional

from ..exceptions import InvalidConfigError, InvalidDateRangeError
from ..logging_config import get_logger
from .labels import HOUR_LABELS, MONTH_LABELS, WEEK_LABELS, WEEKDAY_LABELS

logger = get_logger(__name__)


class Mode(str, Enum):
    """What one event weighs: a whole commit, or the lines it churned."""

    COMMITS = "commits"
    LINES = "lines"

    @classmethod
    def parse(cls, value: "str | Mode") -> Mode:
        if isinstance(value, Mode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigError("mode", value, "expected 'commits' or 'lines'") from None

    @property
    def unit_label(self) -> str:
        return "Commits" if self is Mode.COMMITS else "Lines of Code"


class Dimension(str, Enum):
    """A projection of a timestamp onto a fixed set of categories."""

    WEEKDAY = "weekday"
    HOUR = "hour"
    MONTH = "month"
    WEEK = "week"

    @classmethod
    def parse(cls, value: "str | Dimension") -> Dimension:
        if isinstance(value, Dimension):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigError(
                "dimension", value, "expected one of: weekday, hour, month, week"
            ) from None

    @property
    def labels(self) -> tuple[str, ...]:
        return _DIMENSION_LABELS[self]

    @property
    def title(self) -> str:
        return f"Activity by {self.value.capitalize()}"

    @property
    def x_label(self) -> str:
        return f"{self.value.capitalize()}s"

    @property
    def file_suffix(self) -> str:
        return f"by_{self.value}"


_DIMENSION_LABELS = {
    Dimension.WEEKDAY: WEEKDAY_LABELS,
    Dimension.HOUR: HOUR_LABELS,
    Dimension.MONTH: MONTH_LABELS,
    Dimension.WEEK: WEEK_LABELS,
}


@dataclass(frozen=True)
class DateRange:
    """Optional calendar bounds; a missing bound is unbounded on that side.

    Both bounds are compared as midnight UTC of their date, so an event later
    in the day on ``end`` counts as after the range.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidDateRangeError(self.start, self.end)

    @property
    def start_at(self) -> Optional[datetime]:
        return _midnight_utc(self.start)

    @property
    def end_at(self) -> Optional[datetime]:
        return _midnight_utc(self.end)

    def is_before_start(self, when: datetime) -> bool:
        start_at = self.start_at
        return start_at is not None and when < start_at

    def is_after_end(self, when: datetime) -> bool:
        end_at = self.end_at
        return end_at is not None and when > end_at

    def contains(self, when: datetime) -> bool:
        return not self.is_before_start(when) and not self.is_after_end(when)

    @property
    def unbounded(self) -> bool:
        return self.start is None and self.end is None


def _midnight_utc(day: Optional[date]) -> Optional[datetime]:
    if day is None:
        return None
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def time_slots(when: datetime) -> tuple[int, int, int, int]:
    """Return (weekday, hour, month, week) slot indexes for a timestamp.

    Weekday 0 is Sunday. ISO weeks 1..53 land in slots 0..52; a late-December
    date that ISO assigns to week 1 of the next year goes to slot 0.
    The datetime is read in its own offset, i.e. the author's local time.
    """
    weekday = when.isoweekday() % 7
    week = when.isocalendar()[1] - 1
    return weekday, when.hour, when.month - 1, week


@dataclass
class TimeBucketSet:
    """Four parallel counters, one slot per weekday/hour/month/week."""

    weekdays: list[int] = field(default_factory=lambda: [0] * len(WEEKDAY_LABELS))
    hours: list[int] = field(default_factory=lambda: [0] * len(HOUR_LABELS))
    months: list[int] = field(default_factory=lambda: [0] * len(MONTH_LABELS))
    weeks: list[int] = field(default_factory=lambda: [0] * len(WEEK_LABELS))

    def add(self, when: datetime, magnitude: int = 1) -> None:
        weekday, hour, month, week = time_slots(when)
        _bump(self.weekdays, weekday, magnitude, Dimension.WEEKDAY)
        _bump(self.hours, hour, magnitude, Dimension.HOUR)
        _bump(self.months, month, magnitude, Dimension.MONTH)
        _bump(self.weeks, week, magnitude, Dimension.WEEK)

    def merge(self, other: TimeBucketSet) -> None:
        for dimension in Dimension:
            mine = self.values(dimension)
            for i, value in enumerate(other.values(dimension)):
                mine[i] += value

    def values(self, dimension: Dimension) -> list[int]:
        """The live bucket list for a dimension (mutations are visible)."""
        if dimension is Dimension.WEEKDAY:
            return self.weekdays
        if dimension is Dimension.HOUR:
            return self.hours
        if dimension is Dimension.MONTH:
            return self.months
        return self.weeks

    def copy(self) -> TimeBucketSet:
        return TimeBucketSet(
            weekdays=list(self.weekdays),
            hours=list(self.hours),
            months=list(self.months),
            weeks=list(self.weeks),
        )

    @property
    def total(self) -> int:
        # Every event lands in exactly one weekday slot
        return sum(self.weekdays)


def _bump(buckets: list[int], index: int, magnitude: int, dimension: Dimension) -> None:
    if not 0 <= index < len(buckets):
        logger.warning(
            "Dropping %s slot %d (valid range 0..%d)", dimension.value, index, len(buckets) - 1
        )
        return
    buckets[index] += magnitude


class CommitActivity:
    """Per-developer time buckets.

    A developer appears only after at least one event was recorded for them.
    """

    def __init__(self) -> None:
        self._developers: dict[str, TimeBucketSet] = {}

    def record_event(self, developer: str, when: datetime, magnitude: int = 1) -> None:
        """Add ``magnitude`` to the four slots ``when`` falls into for ``developer``."""
        if magnitude < 0:
            raise ValueError(f"magnitude must be non-negative, got {magnitude}")
        buckets = self._developers.get(developer)
        if buckets is None:
            buckets = self._developers[developer] = TimeBucketSet()
        buckets.add(when, magnitude)

    def merge(self, other: CommitActivity) -> None:
        """Element-wise add every developer of ``other`` into this accumulator."""
        for developer, buckets in other.items():
            mine = self._developers.get(developer)
            if mine is None:
                self._developers[developer] = buckets.copy()
            else:
                mine.merge(buckets)

    @classmethod
    def combined(cls, *activities: CommitActivity) -> CommitActivity:
        result = cls()
        for activity in activities:
            result.merge(activity)
        return result

    def totals(self) -> TimeBucketSet:
        """One bucket set summed across all developers."""
        total = TimeBucketSet()
        for buckets in self._developers.values():
            total.merge(buckets)
        return total

    def dimension(self, dimension: Dimension) -> dict[str, list[int]]:
        """Developer -> bucket list for one dimension."""
        return {dev: buckets.values(dimension) for dev, buckets in self._developers.items()}

    @property
    def developers(self) -> list[str]:
        return list(self._developers)

    def items(self) -> Iterator[tuple[str, TimeBucketSet]]:
        return iter(self._developers.items())

    def __getitem__(self, developer: str) -> TimeBucketSet:
        return self._developers[developer]

    def __contains__(self, developer: object) -> bool:
        return developer in self._developers

    def __iter__(self) -> Iterator[str]:
        return iter(self._developers)

    def __len__(self) -> int:
        return len(self._developers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommitActivity):
            return NotImplemented
        return self._developers == other._developers

    def __repr__(self) -> str:
        return f"CommitActivity(developers={self.developers!r})"


@dataclass(frozen=True)
class RepoCommitActivity:
    repo_name: str
    activity: CommitActivity


@dataclass
class CombinedCommitActivity:
    """Per-repository activity in the order the repositories were given."""

    repos: list[RepoCommitActivity] = field(default_factory=list)

    def add(self, repo_name: str, activity: CommitActivity) -> None:
        self.repos.append(RepoCommitActivity(repo_name=repo_name, activity=activity))

    def overall(self) -> CommitActivity:
        """All repositories summed into one accumulator."""
        return CommitActivity.combined(*(repo.activity for repo in self.repos))

    @property
    def repo_names(self) -> list[str]:
        return [repo.repo_name for repo in self.repos]

    def __iter__(self) -> Iterator[RepoCommitActivity]:
        return iter(self.repos)

    def __len__(self) -> int:
        return len(self.repos)
