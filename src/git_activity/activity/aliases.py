"""Map raw author identities to canonical developer names.

Alias files are plain text, one developer per line:

    Alice Smith|alice@example.com|asmith@corp.example

Every alias on a line maps to the name in the first field. Matching is
case-insensitive and ignores surrounding whitespace.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Union

from ..exceptions import InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)

UNKNOWN_DEVELOPER = "Unknown"


def normalize_identity(identity: str) -> str:
    return identity.strip().lower()


class AliasResolver:
    """Read-only alias table with an ``Unknown`` fallback."""

    def __init__(self, aliases: Mapping[str, str] | None = None):
        table = {normalize_identity(k): v for k, v in (aliases or {}).items()}
        self._aliases = MappingProxyType(table)

    @classmethod
    def empty(cls) -> AliasResolver:
        """Resolver that maps every identity to ``Unknown``."""
        return cls()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> AliasResolver:
        aliases: dict[str, str] = {}
        for lineno, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("|")
            if len(parts) < 2:
                logger.debug("Skipping alias line %d without aliases: %r", lineno, line)
                continue
            name = parts[0].strip()
            for alias in parts[1:]:
                key = normalize_identity(alias)
                if key:
                    aliases[key] = name
        return cls(aliases)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> AliasResolver:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise InvalidPathError(path, f"cannot read alias file: {e}") from e
        resolver = cls.from_lines(text.splitlines())
        logger.debug("Loaded %d aliases from %s", len(resolver), path)
        return resolver

    def resolve(self, identity: str) -> str:
        return self._aliases.get(normalize_identity(identity), UNKNOWN_DEVELOPER)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def __len__(self) -> int:
        return len(self._aliases)
