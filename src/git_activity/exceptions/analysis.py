"""Analysis-related exceptions: repository access and chart output."""

from pathlib import Path
from typing import Union

from .base import GitActivityError


class AnalysisError(GitActivityError):
    """Base class for analysis-related errors."""
    pass


class RepositoryAccessError(AnalysisError):
    """Raised when a repository cannot be opened or its history cannot be read."""

    def __init__(self, repo_path: Union[str, Path], operation: str, reason: str):
        super().__init__(
            f"Cannot read repository: {repo_path}",
            details={"repository": str(repo_path), "operation": operation, "reason": reason},
        )
        self.repo_path = repo_path
        self.operation = operation
        self.reason = reason


class RenderError(GitActivityError):
    """Raised when a chart cannot be produced or written."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot render chart: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
