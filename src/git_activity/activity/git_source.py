"""Read commit history via the git executable."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from ..exceptions import RepositoryAccessError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommitRecord:
    sha: str
    author_email: str
    authored_at: datetime  # author date, tz-aware, in the author's offset
    parents: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileStat:
    path: str
    added: int
    deleted: int

    @property
    def churn(self) -> int:
        return self.added + self.deleted


class GitLogSource:
    """Commit-log source for one repository.

    Opening checks that the path is a repository and that HEAD resolves; every
    later failure raises RepositoryAccessError naming the git operation.
    """

    # Fields: sha | author date (strict ISO 8601) | parents | author email
    _LOG_FORMAT = "%H|%aI|%P|%ae"

    def __init__(self, repo_path: str | Path, timeout: int = 60):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout = timeout
        self._run_git(["rev-parse", "--git-dir"], operation="open repository")
        self.head = self._run_git(["rev-parse", "--verify", "HEAD"], operation="resolve head").strip()

    def iter_commits(self) -> Iterator[CommitRecord]:
        """Commits reachable from HEAD, newest first."""
        raw = self._run_git(
            ["log", f"--format={self._LOG_FORMAT}", self.head], operation="read history"
        )
        for line in raw.splitlines():
            if line:
                yield self._parse_commit_line(line)

    def file_stats(self, commit: CommitRecord) -> list[FileStat]:
        """Lines added/deleted per file, against the first parent (root: empty tree)."""
        if commit.parents:
            args = ["diff-tree", "-r", "-z", "--numstat", "--no-renames", commit.parents[0], commit.sha]
        else:
            args = ["diff-tree", "--root", "-r", "-z", "--numstat", "--no-renames", "--no-commit-id", commit.sha]
        raw = self._run_git(args, operation=f"read diff stats of {commit.sha[:12]}")
        return self._parse_numstat(raw, commit.sha)

    def last_modification(self, path: str, sha: str) -> Optional[datetime]:
        """Author date of the newest commit at or before ``sha`` that touched ``path``."""
        raw = self._run_git(
            ["log", "-n1", "--format=%aI", sha, "--", path],
            operation=f"find last modification of {path}",
        ).strip()
        if not raw:
            return None
        return self._parse_date(raw, sha)

    def _run_git(self, args: list[str], operation: str) -> str:
        cmd = ["git", "-C", self.repo_path, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise RepositoryAccessError(self.repo_path, operation, "git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise RepositoryAccessError(
                self.repo_path, operation, f"git timed out after {self.timeout}s"
            ) from e
        if result.returncode != 0:
            raise RepositoryAccessError(self.repo_path, operation, result.stderr.strip())
        return result.stdout

    def _parse_commit_line(self, line: str) -> CommitRecord:
        # Email goes last; it is the only field that could contain a separator
        parts = line.split("|", 3)
        if len(parts) != 4:
            raise RepositoryAccessError(self.repo_path, "read history", f"malformed log line: {line!r}")
        sha, date_str, parents, email = parts
        return CommitRecord(
            sha=sha,
            author_email=email,
            authored_at=self._parse_date(date_str, sha),
            parents=tuple(parents.split()),
        )

    def _parse_date(self, value: str, sha: str) -> datetime:
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise RepositoryAccessError(
                self.repo_path, "read history", f"bad author date {value!r} on {sha[:12]}"
            ) from e

    def _parse_numstat(self, raw: str, sha: str) -> list[FileStat]:
        stats = []
        for entry in raw.split("\0"):
            entry = entry.strip("\n")
            if not entry:
                continue
            fields = entry.split("\t", 2)
            if len(fields) != 3:
                raise RepositoryAccessError(
                    self.repo_path, f"read diff stats of {sha[:12]}", f"malformed numstat entry: {entry!r}"
                )
            added, deleted, path = fields
            # Binary files report "-" for both counts
            stats.append(
                FileStat(
                    path=path,
                    added=int(added) if added != "-" else 0,
                    deleted=int(deleted) if deleted != "-" else 0,
                )
            )
        return stats
