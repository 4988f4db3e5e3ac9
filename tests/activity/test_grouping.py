"""Tests for the grouping/stacking transform."""

from datetime import datetime, timezone

import pytest

from git_activity.activity.grouping import (
    FLAT_SERIES,
    GroupBy,
    grand_total,
    group,
    normalize,
    ordered_series,
    series_values,
)
from git_activity.activity.models import CombinedCommitActivity, CommitActivity, Dimension
from git_activity.exceptions import ConfigurationError

# Monday, 10:00, March, ISO week 11 (slot 10)
MONDAY_10AM = datetime(2024, 3, 11, 10, 0, tzinfo=timezone.utc)
FRIDAY_6PM = datetime(2024, 7, 19, 18, 0, tzinfo=timezone.utc)


def nonzero(grouped):
    return {key: {k: v for k, v in series.items() if v} for key, series in grouped.items()}


@pytest.fixture
def two_repos():
    """Repo A: 3 commits by Alice; repo B: 1 commit by an unaliased author."""
    repo_a = CommitActivity()
    for _ in range(3):
        repo_a.record_event("Alice", MONDAY_10AM)
    repo_b = CommitActivity()
    repo_b.record_event("Unknown", MONDAY_10AM)

    combined = CombinedCommitActivity()
    combined.add("A", repo_a)
    combined.add("B", repo_b)
    return combined


@pytest.fixture
def mixed_repos():
    repo_x = CommitActivity()
    repo_x.record_event("Carol", MONDAY_10AM, 5)
    repo_x.record_event("Dave", FRIDAY_6PM, 2)
    repo_y = CommitActivity()
    repo_y.record_event("Carol", FRIDAY_6PM, 7)
    repo_y.record_event("Erin", MONDAY_10AM, 1)

    combined = CombinedCommitActivity()
    combined.add("x", repo_x)
    combined.add("y", repo_y)
    return combined


class TestGroup:
    """Summing buckets into series per grouping."""

    def test_flat_weekday(self, two_repos):
        """Flat grouping puts everything in one All series."""
        assert nonzero(group(two_repos, Dimension.WEEKDAY, GroupBy.FLAT)) == {
            "All": {"Monday": 4}
        }

    def test_by_developer_weekday(self, two_repos):
        """One series per developer across repositories."""
        assert nonzero(group(two_repos, Dimension.WEEKDAY, GroupBy.BY_DEVELOPER)) == {
            "Alice": {"Monday": 3},
            "Unknown": {"Monday": 1},
        }

    def test_by_repository_weekday(self, two_repos):
        """One series per repository."""
        assert nonzero(group(two_repos, Dimension.WEEKDAY, GroupBy.BY_REPOSITORY)) == {
            "A": {"Monday": 3},
            "B": {"Monday": 1},
        }

    def test_other_dimensions(self, two_repos):
        """Hour, month and week views of the same events."""
        assert nonzero(group(two_repos, Dimension.HOUR, GroupBy.FLAT)) == {"All": {"10:00": 4}}
        assert nonzero(group(two_repos, Dimension.MONTH, GroupBy.FLAT)) == {"All": {"March": 4}}
        assert nonzero(group(two_repos, Dimension.WEEK, GroupBy.FLAT)) == {"All": {"Week 10": 4}}

    def test_every_series_has_every_label(self, mixed_repos):
        """Series carry all labels, zeros included."""
        grouped = group(mixed_repos, Dimension.HOUR, GroupBy.BY_DEVELOPER)
        for series in grouped.values():
            assert list(series) == list(Dimension.HOUR.labels)

    def test_developer_summed_across_repositories(self, mixed_repos):
        """A developer's series adds up every repository."""
        grouped = group(mixed_repos, Dimension.WEEKDAY, GroupBy.BY_DEVELOPER)
        assert grouped["Carol"]["Monday"] == 5
        assert grouped["Carol"]["Friday"] == 7
        assert grouped["Dave"]["Friday"] == 2
        assert grouped["Erin"]["Monday"] == 1

    @pytest.mark.parametrize("dimension", list(Dimension))
    def test_totals_agree_across_groupings(self, mixed_repos, dimension):
        """Grouping redistributes values without changing the total."""
        totals = {
            group_by: grand_total(group(mixed_repos, dimension, group_by)) for group_by in GroupBy
        }
        assert totals[GroupBy.FLAT] == totals[GroupBy.BY_REPOSITORY] == totals[GroupBy.BY_DEVELOPER] == 15

    def test_deterministic(self, mixed_repos):
        """Grouping the same input twice gives equal results."""
        first = group(mixed_repos, Dimension.MONTH, GroupBy.BY_DEVELOPER)
        second = group(mixed_repos, Dimension.MONTH, GroupBy.BY_DEVELOPER)
        assert first == second

    def test_empty_input(self):
        """No repositories gives an empty All series, or no series."""
        combined = CombinedCommitActivity()
        assert nonzero(group(combined, Dimension.WEEKDAY, GroupBy.FLAT)) == {FLAT_SERIES: {}}
        assert group(combined, Dimension.WEEKDAY, GroupBy.BY_DEVELOPER) == {}

    def test_repository_without_activity_gets_zero_series(self):
        """A quiet repository still shows up, at zero."""
        combined = CombinedCommitActivity()
        combined.add("quiet", CommitActivity())
        grouped = group(combined, Dimension.WEEKDAY, GroupBy.BY_REPOSITORY)
        assert set(grouped) == {"quiet"}
        assert sum(grouped["quiet"].values()) == 0

    def test_accepts_strings(self, two_repos):
        """Dimension and grouping may be given by name."""
        grouped = group(two_repos, "weekday", "dev")
        assert set(grouped) == {"Alice", "Unknown"}


class TestGroupByParse:
    """Grouping selector names and short forms."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, GroupBy.FLAT),
            ("", GroupBy.FLAT),
            ("flat", GroupBy.FLAT),
            ("repo", GroupBy.BY_REPOSITORY),
            ("byRepository", GroupBy.BY_REPOSITORY),
            ("byRepo", GroupBy.BY_REPOSITORY),
            ("dev", GroupBy.BY_DEVELOPER),
            ("developer", GroupBy.BY_DEVELOPER),
            ("byDev", GroupBy.BY_DEVELOPER),
            (GroupBy.BY_DEVELOPER, GroupBy.BY_DEVELOPER),
        ],
    )
    def test_parse(self, value, expected):
        """Canonical names and CLI short forms."""
        assert GroupBy.parse(value) is expected

    def test_unknown_is_configuration_error(self):
        """An unknown selector is a configuration error."""
        with pytest.raises(ConfigurationError):
            GroupBy.parse("team")


class TestPresentation:
    """Ordering and scaling of series for charts."""

    def test_ordered_series_is_lexicographic(self, mixed_repos):
        """Series are ordered by key."""
        grouped = group(mixed_repos, Dimension.WEEKDAY, GroupBy.BY_DEVELOPER)
        assert ordered_series(grouped) == ["Carol", "Dave", "Erin"]

    def test_series_values_in_category_order(self, two_repos):
        """Values follow the dimension's label order."""
        values = series_values(group(two_repos, Dimension.WEEKDAY, GroupBy.BY_REPOSITORY), Dimension.WEEKDAY)
        assert list(values) == ["A", "B"]
        assert values["A"][0] == ("Sunday", 0)
        assert values["A"][1] == ("Monday", 3)
        assert len(values["B"]) == 7

    def test_normalize(self, mixed_repos):
        """Each series scales to proportions of its own total."""
        proportions = normalize(group(mixed_repos, Dimension.WEEKDAY, GroupBy.BY_REPOSITORY))
        assert proportions["x"]["Monday"] == pytest.approx(5 / 7)
        assert proportions["x"]["Friday"] == pytest.approx(2 / 7)
        assert sum(proportions["y"].values()) == pytest.approx(1.0)

    def test_normalize_empty_series_stays_zero(self):
        """An all-zero series is not divided by zero."""
        assert normalize({"quiet": {"Monday": 0}}) == {"quiet": {"Monday": 0.0}}

    def test_unknown_dimension_is_configuration_error(self, two_repos):
        """An unsupported dimension is rejected as configuration."""
        with pytest.raises(ConfigurationError):
            group(two_repos, "year", GroupBy.FLAT)
