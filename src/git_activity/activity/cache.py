"""In-memory cache of per-file last-modification times.

Line-mode attribution asks, for every file a commit touches, when that file
was last modified at or before that commit. Answering it means a history
walk filtered by path, so answers are kept per (path, commit) for the
duration of one repository's analysis. Nothing is written to disk.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..logging_config import get_logger

logger = get_logger(__name__)


class ModificationCache:
    """(file path, commit sha) -> last-modification datetime.

    Usage:
        cache = ModificationCache()
        when = cache.get_or_compute(path, sha, lambda: source.last_modification(path, sha))

    One instance per repository analysis; never share one between repositories.
    """

    def __init__(self) -> None:
        self._timestamps: dict[tuple[str, str], datetime] = {}
        self.hits = 0
        self.misses = 0

    def get(self, path: str, sha: str) -> datetime | None:
        when = self._timestamps.get((path, sha))
        if when is None:
            self.misses += 1
        else:
            self.hits += 1
        return when

    def set(self, path: str, sha: str, when: datetime) -> None:
        self._timestamps[(path, sha)] = when

    def get_or_compute(self, path: str, sha: str, compute: Callable[[], datetime]) -> datetime:
        when = self.get(path, sha)
        if when is None:
            when = compute()
            self.set(path, sha, when)
        return when

    def stats(self) -> dict[str, int]:
        return {"entries": len(self._timestamps), "hits": self.hits, "misses": self.misses}

    def clear(self) -> None:
        self._timestamps.clear()
        self.hits = 0
        self.misses = 0
        logger.debug("Cleared modification cache")

    def __contains__(self, key: object) -> bool:
        return key in self._timestamps

    def __len__(self) -> int:
        return len(self._timestamps)
