"""Root of the git-activity error hierarchy.

Every error carries a short ``message`` plus ``details``: string key/value
pairs naming what failed (repository path, git operation, config key, chart
path). The CLI prints ``str(error)``, which appends the details, and exits
with ``exit_code``.
"""

from typing import Dict, Optional


class GitActivityError(Exception):
    """Base exception for all git-activity errors."""

    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
