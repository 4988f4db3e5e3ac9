"""Reshape combined activity into series x category tables for charting."""

from __future__ import annotations

from enum import Enum

from ..exceptions import InvalidConfigError
from .models import CombinedCommitActivity, Dimension

FLAT_SERIES = "All"

GroupedData = dict[str, dict[str, int]]


class GroupBy(str, Enum):
    """How activity is split into chart series."""

    FLAT = "flat"
    BY_REPOSITORY = "byRepository"
    BY_DEVELOPER = "byDeveloper"

    @classmethod
    def parse(cls, value: "str | GroupBy | None") -> GroupBy:
        """Accept the canonical names plus the short forms used on the command line."""
        if isinstance(value, GroupBy):
            return value
        key = (value or "").strip().lower()
        try:
            return _GROUP_BY_ALIASES[key]
        except KeyError:
            raise InvalidConfigError(
                "group_by", value, "expected one of: flat, repo, dev"
            ) from None

    @property
    def file_suffix(self) -> str:
        return "" if self is GroupBy.FLAT else self.value


_GROUP_BY_ALIASES = {
    "": GroupBy.FLAT,
    "flat": GroupBy.FLAT,
    "all": GroupBy.FLAT,
    "repo": GroupBy.BY_REPOSITORY,
    "repository": GroupBy.BY_REPOSITORY,
    "byrepo": GroupBy.BY_REPOSITORY,
    "byrepository": GroupBy.BY_REPOSITORY,
    "dev": GroupBy.BY_DEVELOPER,
    "developer": GroupBy.BY_DEVELOPER,
    "bydev": GroupBy.BY_DEVELOPER,
    "bydeveloper": GroupBy.BY_DEVELOPER,
}


def group(
    combined: CombinedCommitActivity, dimension: Dimension, group_by: GroupBy
) -> GroupedData:
    """Sum bucket values into ``{series: {category label: value}}``.

    Every series carries every category label of the dimension, zeros
    included, so stacked series line up.
    """
    dimension = Dimension.parse(dimension)
    group_by = GroupBy.parse(group_by)
    labels = dimension.labels
    grouped: GroupedData = {}

    if group_by is GroupBy.FLAT:
        _series(grouped, FLAT_SERIES, labels)

    for repo in combined:
        for developer, values in repo.activity.dimension(dimension).items():
            if group_by is GroupBy.FLAT:
                key = FLAT_SERIES
            elif group_by is GroupBy.BY_REPOSITORY:
                key = repo.repo_name
            else:
                key = developer
            series = _series(grouped, key, labels)
            for label, value in zip(labels, values):
                series[label] += value

    # Repositories without any developer still get a (zero) series
    if group_by is GroupBy.BY_REPOSITORY:
        for name in combined.repo_names:
            _series(grouped, name, labels)

    return grouped


def _series(grouped: GroupedData, key: str, labels: tuple[str, ...]) -> dict[str, int]:
    series = grouped.get(key)
    if series is None:
        series = grouped[key] = {label: 0 for label in labels}
    return series


def ordered_series(grouped: GroupedData) -> list[str]:
    """Series keys in presentation (legend) order."""
    return sorted(grouped)


def series_values(grouped: GroupedData, dimension: Dimension) -> dict[str, list[tuple[str, int]]]:
    """Series -> ``[(label, value)]`` in category order, series sorted by key."""
    labels = Dimension.parse(dimension).labels
    return {
        key: [(label, grouped[key].get(label, 0)) for label in labels]
        for key in ordered_series(grouped)
    }


def normalize(grouped: GroupedData) -> dict[str, dict[str, float]]:
    """Each series scaled to proportions of its own total; empty series stay zero."""
    result: dict[str, dict[str, float]] = {}
    for key, series in grouped.items():
        total = sum(series.values())
        result[key] = {
            label: (value / total if total > 0 else 0.0) for label, value in series.items()
        }
    return result


def grand_total(grouped: GroupedData) -> int:
    return sum(sum(series.values()) for series in grouped.values())
