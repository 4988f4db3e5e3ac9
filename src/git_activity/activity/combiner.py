"""Analyze several repositories and keep their results side by side."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

from ..logging_config import get_logger
from .aliases import AliasResolver
from .analyzer import CommitLogSource, analyze_repository
from .models import CombinedCommitActivity, DateRange, Mode

logger = get_logger(__name__)

LABEL_SEPARATOR = "_and_"
FALLBACK_LABEL = "combined"
MAX_LABEL_LENGTH = 128


def repo_name(repo_path: str | Path) -> str:
    """Last path component without a trailing ``.git``."""
    base = Path(str(repo_path).rstrip("/\\")).name
    return base.removesuffix(".git")


def output_label(repo_paths: Sequence[str | Path]) -> str:
    """File-name prefix naming every analyzed repository."""
    label = LABEL_SEPARATOR.join(repo_name(path) for path in repo_paths)
    if not label or len(label) > MAX_LABEL_LENGTH:
        return FALLBACK_LABEL
    return label


def analyze_all(
    repo_paths: Sequence[str | Path],
    mode: Mode,
    date_range: DateRange,
    resolver: AliasResolver,
    source_factory: Optional[Callable[[str | Path], CommitLogSource]] = None,
    git_timeout: int = 60,
) -> tuple[str, CombinedCommitActivity]:
    """Run the analyzer over every repository, in order.

    The first RepositoryAccessError propagates; there is no partial result.
    """
    mode = Mode.parse(mode)
    logger.info("Analyzing %d repositories in '%s' mode", len(repo_paths), mode.value)
    combined = CombinedCommitActivity()

    for repo_path in repo_paths:
        logger.info("Analyzing repository: %s", repo_path)
        source = source_factory(repo_path) if source_factory is not None else None
        activity = analyze_repository(
            repo_path,
            mode,
            date_range,
            resolver,
            source=source,
            git_timeout=git_timeout,
        )
        combined.add(repo_name(repo_path), activity)

    return output_label(repo_paths), combined
