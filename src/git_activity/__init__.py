"""
git-activity - when does a team actually commit?

Walks the history of one or more git repositories and buckets commits (or
lines changed) by weekday, hour of day, month and ISO week, per developer,
then draws the result as bar charts.
"""

__version__ = "0.3.0"

from .activity import (
    AliasResolver,
    CombinedCommitActivity,
    CommitActivity,
    DateRange,
    Dimension,
    GroupBy,
    Mode,
    analyze_all,
    analyze_repository,
    group,
)
from .charts import generate_charts

__all__ = [
    "analyze_all",  # Main entry point
    "analyze_repository",
    "generate_charts",
    "group",
    "AliasResolver",
    "CommitActivity",
    "CombinedCommitActivity",
    "DateRange",
    "Dimension",
    "GroupBy",
    "Mode",
]
