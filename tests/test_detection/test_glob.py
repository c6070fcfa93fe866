"""Tests for the shared glob engine."""

import pytest

from gitsetup.detection.glob import glob_match, is_literal, wildcards_in_last_segment


class TestGlobMatch:
    """Tests for glob_match."""

    @pytest.mark.parametrize(
        ("pattern", "text"),
        [
            ("git@github.com:acme/*", "git@github.com:acme/widgets.git"),
            ("*/work/*", "/home/user/work/project"),
            ("/home/*/src", "/home/user/src"),
            ("/home/**", "/home/user/deep/tree"),
            ("build-??", "build-01"),
            ("host[0-9]", "host7"),
        ],
    )
    def test_matches(self, pattern: str, text: str) -> None:
        """Wildcards match, and `*` crosses path separators."""
        assert glob_match(pattern, text) is True

    @pytest.mark.parametrize(
        ("pattern", "text"),
        [
            ("git@github.com:acme/*", "git@github.com:other/widgets.git"),
            ("/home/*/src", "/home/user/src/extra"),
            ("build-??", "build-1"),
            ("host[!0-9]", "host7"),
        ],
    )
    def test_non_matches(self, pattern: str, text: str) -> None:
        """The whole text must match."""
        assert glob_match(pattern, text) is False

    def test_case_sensitive_by_default(self) -> None:
        """Matching is case-sensitive unless requested otherwise."""
        assert glob_match("Laptop-*", "laptop-1") is False
        assert glob_match("Laptop-*", "laptop-1", ignore_case=True) is True

    def test_literal_pattern_is_equality(self) -> None:
        """Patterns without wildcards compare by equality."""
        assert glob_match("/home/user", "/home/user") is True
        assert glob_match("/home/user", "/home/user/x") is False


class TestPatternShape:
    """Tests for is_literal and wildcards_in_last_segment."""

    def test_is_literal(self) -> None:
        assert is_literal("git@github.com:acme/widgets.git") is True
        assert is_literal("git@github.com:acme/*") is False
        assert is_literal("host?") is False
        assert is_literal("[ab]") is False

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("git@github.com:acme/*", True),
            ("https://github.com/acme/*.git", True),
            ("git@github.com:*", True),
            ("git@github.com:*/widgets", False),
            ("*github.com*", False),
            ("git@github.com:acme/widgets", False),
        ],
    )
    def test_wildcards_in_last_segment(self, pattern: str, expected: bool) -> None:
        assert wildcards_in_last_segment(pattern) is expected
