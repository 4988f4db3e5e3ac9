"""Tests for alias resolution."""

import pytest

from git_activity.activity.aliases import UNKNOWN_DEVELOPER, AliasResolver
from git_activity.exceptions import ConfigurationError, InvalidPathError


class TestAliasResolver:
    """Email/name to canonical developer mapping."""

    def test_case_insensitive(self):
        """Lookups ignore case."""
        resolver = AliasResolver.from_lines(["Dev|Dev@Example.com"])
        assert resolver.resolve("Dev@Example.com") == "Dev"
        assert resolver.resolve("dev@example.com") == "Dev"

    def test_identity_trimmed(self):
        """Surrounding whitespace is ignored."""
        resolver = AliasResolver.from_lines(["Dev|dev@example.com"])
        assert resolver.resolve("  dev@example.com \n") == "Dev"

    def test_unknown_identity_falls_back(self):
        """Unmapped identities resolve to Unknown."""
        resolver = AliasResolver.from_lines(["Alice|alice@x.com"])
        assert resolver.resolve("bob@x.com") == UNKNOWN_DEVELOPER == "Unknown"

    def test_empty_resolver_maps_everything_to_unknown(self):
        """Without a people file every author is Unknown."""
        resolver = AliasResolver.empty()
        assert len(resolver) == 0
        assert resolver.resolve("alice@x.com") == "Unknown"
        assert resolver.resolve("") == "Unknown"

    def test_every_alias_on_a_line_maps_to_its_name(self):
        """All aliases after the name map back to it."""
        resolver = AliasResolver.from_lines(["Alice Smith | alice@x.com | asmith@corp.example "])
        assert resolver.resolve("alice@x.com") == "Alice Smith"
        assert resolver.resolve("ASMITH@corp.example") == "Alice Smith"

    def test_malformed_blank_and_comment_lines_skipped(self):
        """Lines without a name and an alias are ignored."""
        resolver = AliasResolver.from_lines(
            ["", "# comment|not@alias", "just-a-name", "Bob|bob@x.com"]
        )
        assert dict(resolver.aliases) == {"bob@x.com": "Bob"}

    def test_later_line_wins_for_duplicate_alias(self):
        """A repeated alias takes the last name given."""
        resolver = AliasResolver.from_lines(["Old|shared@x.com", "New|shared@x.com"])
        assert resolver.resolve("shared@x.com") == "New"

    def test_table_is_read_only(self):
        """The alias table cannot be mutated after loading."""
        resolver = AliasResolver.from_lines(["Bob|bob@x.com"])
        with pytest.raises(TypeError):
            resolver.aliases["eve@x.com"] = "Eve"

    def test_from_file(self, people_file):
        """The fixture people file loads three aliases."""
        resolver = AliasResolver.from_file(people_file)
        assert resolver.resolve("alice.smith@corp.example") == "Alice"
        assert resolver.resolve("carol@x.com") == "Carol"
        assert len(resolver) == 3

    def test_missing_file_is_configuration_error(self, tmp_path):
        """An unreadable people file is a configuration error."""
        with pytest.raises(InvalidPathError) as exc_info:
            AliasResolver.from_file(tmp_path / "nope.txt")
        assert isinstance(exc_info.value, ConfigurationError)
        assert "nope.txt" in str(exc_info.value)
