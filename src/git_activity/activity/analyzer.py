"""Turn one repository's history into a CommitActivity."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Protocol

from ..logging_config import get_logger
from .aliases import AliasResolver
from .cache import ModificationCache
from .git_source import CommitRecord, FileStat, GitLogSource
from .models import CommitActivity, DateRange, Mode

logger = get_logger(__name__)


class CommitLogSource(Protocol):
    """What the analyzer needs from a repository reader."""

    def iter_commits(self) -> Iterator[CommitRecord]: ...

    def file_stats(self, commit: CommitRecord) -> list[FileStat]: ...

    def last_modification(self, path: str, sha: str) -> Optional[datetime]: ...


def analyze_repository(
    repo_path: str | Path,
    mode: Mode,
    date_range: DateRange,
    resolver: AliasResolver,
    source: Optional[CommitLogSource] = None,
    cache: Optional[ModificationCache] = None,
    git_timeout: int = 60,
) -> CommitActivity:
    """Walk history from HEAD once and bucket it by developer.

    In commits mode every commit in range is one event at its author date.
    In lines mode every file a commit touches contributes ``added + deleted``
    at that file's last-modification time, credited to the commit's author.

    Raises:
        RepositoryAccessError: if the repository cannot be opened or read.
            Nothing accumulated so far is returned.
    """
    mode = Mode.parse(mode)
    if source is None:
        source = GitLogSource(repo_path, timeout=git_timeout)

    if mode is Mode.COMMITS:
        activity, visited = _count_commits(source, date_range, resolver)
    else:
        if cache is None:
            cache = ModificationCache()
        activity, visited = _count_lines(source, date_range, resolver, cache)
        logger.debug("Modification cache for %s: %s", repo_path, cache.stats())

    logger.debug(
        "Analyzed %s in %s mode: %d commits visited, %d developers",
        repo_path,
        mode.value,
        visited,
        len(activity),
    )
    return activity


def _count_commits(
    source: CommitLogSource, date_range: DateRange, resolver: AliasResolver
) -> tuple[CommitActivity, int]:
    activity = CommitActivity()
    visited = 0
    for commit in source.iter_commits():
        visited += 1
        if not date_range.contains(commit.authored_at):
            continue
        activity.record_event(resolver.resolve(commit.author_email), commit.authored_at, 1)
    return activity, visited


def _count_lines(
    source: CommitLogSource,
    date_range: DateRange,
    resolver: AliasResolver,
    cache: ModificationCache,
) -> tuple[CommitActivity, int]:
    activity = CommitActivity()
    visited = 0
    for commit in source.iter_commits():
        visited += 1
        # A file's last modification is never later than the commit visiting it
        if date_range.is_before_start(commit.authored_at):
            continue

        developer = resolver.resolve(commit.author_email)
        for stat in source.file_stats(commit):
            modified_at = cache.get_or_compute(
                stat.path, commit.sha, lambda: _last_modification(source, stat.path, commit)
            )
            if not date_range.contains(modified_at):
                continue
            activity.record_event(developer, modified_at, stat.churn)
    return activity, visited


def _last_modification(source: CommitLogSource, path: str, commit: CommitRecord) -> datetime:
    modified_at = source.last_modification(path, commit.sha)
    if modified_at is None:
        # Path history simplification can hide the commit itself (e.g. a merge
        # that took the file from its second parent)
        logger.debug("No path history for %s at %s, using commit date", path, commit.sha[:12])
        return commit.authored_at
    return modified_at
