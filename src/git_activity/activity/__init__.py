"""Activity aggregation: walking history into per-developer buckets."""

from .aliases import UNKNOWN_DEVELOPER, AliasResolver
from .analyzer import analyze_repository
from .cache import ModificationCache
from .combiner import analyze_all, output_label, repo_name
from .git_source import CommitRecord, FileStat, GitLogSource
from .grouping import GroupBy, group, normalize, ordered_series, series_values
from .models import (
    CombinedCommitActivity,
    CommitActivity,
    DateRange,
    Dimension,
    Mode,
    RepoCommitActivity,
    TimeBucketSet,
)

__all__ = [
    "AliasResolver",
    "UNKNOWN_DEVELOPER",
    "CommitActivity",
    "CombinedCommitActivity",
    "RepoCommitActivity",
    "TimeBucketSet",
    "DateRange",
    "Dimension",
    "Mode",
    "ModificationCache",
    "CommitRecord",
    "FileStat",
    "GitLogSource",
    "GroupBy",
    "analyze_repository",
    "analyze_all",
    "output_label",
    "repo_name",
    "group",
    "normalize",
    "ordered_series",
    "series_values",
]
