"""Shared test fixtures for git-activity."""

import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional

import pytest

from git_activity.activity.git_source import CommitRecord, FileStat
from git_activity.exceptions import RepositoryAccessError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class FakeSource:
    """In-memory commit-log source.

    ``commits`` are (sha, iso author date, email, {path: (added, deleted)})
    tuples, newest first, mirroring ``git log`` order.
    """

    def __init__(self, commits, fail_on: Optional[str] = None):
        self.records = []
        self.stats = {}
        for sha, when, email, files in commits:
            self.records.append(
                CommitRecord(sha=sha, author_email=email, authored_at=datetime.fromisoformat(when))
            )
            self.stats[sha] = [FileStat(path, a, d) for path, (a, d) in files.items()]
        self.fail_on = fail_on
        self.last_modification_calls = 0

    def iter_commits(self):
        for record in self.records:
            if record.sha == self.fail_on:
                raise RepositoryAccessError("fake", "read history", f"broken object {record.sha}")
            yield record

    def file_stats(self, commit):
        return self.stats[commit.sha]

    def last_modification(self, path, sha):
        self.last_modification_calls += 1
        seen = False
        for record in self.records:
            if record.sha == sha:
                seen = True
            if seen and any(stat.path == path for stat in self.stats[record.sha]):
                return record.authored_at
        return None


@pytest.fixture
def fake_source():
    """Factory for FakeSource instances."""
    return FakeSource


class GitRepoBuilder:
    """Creates a throwaway repository with fully controlled author dates."""

    def __init__(self, path: Path):
        self.path = path
        path.mkdir(parents=True, exist_ok=True)
        self._git("init", "-q")
        self._git("config", "user.email", "test@test.com")
        self._git("config", "user.name", "Test")
        self._git("config", "commit.gpgsign", "false")

    def commit(
        self,
        files: dict[str, str],
        when: str,
        email: str = "alice@x.com",
        message: str = "change",
    ) -> str:
        """Write ``files`` (path -> full content), commit, and return the sha."""
        for name, content in files.items():
            target = self.path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        self._git("add", "-A")
        env = {
            **os.environ,
            "GIT_AUTHOR_NAME": email.split("@")[0],
            "GIT_AUTHOR_EMAIL": email,
            "GIT_AUTHOR_DATE": when,
            "GIT_COMMITTER_NAME": "Test",
            "GIT_COMMITTER_EMAIL": "test@test.com",
            "GIT_COMMITTER_DATE": when,
        }
        self._git("commit", "-q", "-m", message, env=env)
        return self._git("rev-parse", "HEAD").strip()

    def _git(self, *args, env=None) -> str:
        result = subprocess.run(
            ["git", "-C", str(self.path), *args],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )
        return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Factory: ``git_repo("name")`` builds an empty repository under tmp_path."""
    if shutil.which("git") is None:
        pytest.skip("git not found")

    def build(name: str = "repo") -> GitRepoBuilder:
        return GitRepoBuilder(tmp_path / name)

    return build


@pytest.fixture
def people_file():
    """Alias file mapping alice's addresses to 'Alice'."""
    return FIXTURES_DIR / "people.txt"
