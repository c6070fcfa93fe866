"""Glob matching shared by every detection rule.

Dialect:
- `*` matches any run of characters, including path separators
- `**` is accepted and behaves exactly like `*`
- `?` matches a single character
- `[seq]` / `[!seq]` match one character in / not in seq

Matching is case-sensitive unless `ignore_case` is set.
"""

import fnmatch
import re
from functools import lru_cache

GLOB_CHARS = frozenset("*?[")


def is_literal(pattern: str) -> bool:
    """Return True if the pattern contains no wildcard characters."""
    return not any(ch in GLOB_CHARS for ch in pattern)


@lru_cache(maxsize=512)
def _compile(pattern: str, ignore_case: bool) -> re.Pattern[str]:
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(fnmatch.translate(pattern), flags)


def glob_match(pattern: str, text: str, ignore_case: bool = False) -> bool:
    """Match text against a glob pattern.

    Args:
        pattern: Glob pattern
        text: Candidate string
        ignore_case: Compare case-insensitively

    Returns:
        True if the whole text matches
    """
    if is_literal(pattern):
        if ignore_case:
            return pattern.casefold() == text.casefold()
        return pattern == text
    return _compile(pattern, ignore_case).match(text) is not None


def wildcards_in_last_segment(pattern: str) -> bool:
    """Return True if every wildcard sits after the pattern's last separator.

    Such a pattern pins the whole namespace literally, e.g.
    `git@github.com:acme/*` fixes host and owner and leaves only the
    repository name open. Both `/` and `:` (scp-style URLs) count as
    separators.
    """
    if is_literal(pattern):
        return False
    last_sep = max(pattern.rfind("/"), pattern.rfind(":"))
    head = pattern[: last_sep + 1]
    return bool(head) and is_literal(head)
