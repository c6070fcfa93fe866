"""String similarity algorithms for fuzzy profile lookup.

Every algorithm compares case-insensitively and returns a score in
[0, 1], with 1.0 reserved for equal strings.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

import Levenshtein

PREFIX_BASE_SCORE = 0.6
PREFIX_LENGTH_WEIGHT = 0.35
SUBSTRING_SCORE = 0.5
SUBSEQUENCE_WEIGHT = 0.7


def normalize(text: str) -> str:
    return text.strip().casefold()


class MatchingAlgorithm(ABC):
    """Scores how well a query matches a target string."""

    name: ClassVar[str]

    def score(self, query: str, target: str) -> float:
        """Similarity of query to target in [0, 1]."""
        q = normalize(query)
        t = normalize(target)
        if not q or not t:
            return 1.0 if q == t else 0.0
        if q == t:
            return 1.0
        return min(max(self.similarity(q, t), 0.0), 1.0)

    @abstractmethod
    def similarity(self, query: str, target: str) -> float:
        """Score two normalized, non-empty, unequal strings."""


class ExactMatcher(MatchingAlgorithm):
    """1.0 for case-insensitive equality, 0.0 otherwise."""

    name = "exact"

    def similarity(self, query: str, target: str) -> float:
        return 0.0


class PrefixMatcher(MatchingAlgorithm):
    """Scores targets that start with the query.

    The score grows with the share of the target the query covers and
    always stays between the substring score and 1.0.
    """

    name = "prefix"

    def similarity(self, query: str, target: str) -> float:
        if not target.startswith(query):
            return 0.0
        return PREFIX_BASE_SCORE + PREFIX_LENGTH_WEIGHT * (len(query) / len(target))


class SubstringMatcher(MatchingAlgorithm):
    """Fixed score for a query found anywhere inside the target."""

    name = "substring"

    def similarity(self, query: str, target: str) -> float:
        return SUBSTRING_SCORE if query in target else 0.0


class LevenshteinMatcher(MatchingAlgorithm):
    """1 - edit distance normalized by the longer string's length."""

    name = "levenshtein"

    def similarity(self, query: str, target: str) -> float:
        distance = Levenshtein.distance(query, target)
        return 1.0 - distance / max(len(query), len(target))


class SubsequenceMatcher(MatchingAlgorithm):
    """Share of query characters found in order in the target.

    Handles abbreviations such as "wrk" for "work". Scaled down so it
    never competes with a real prefix or edit-distance match.
    """

    name = "subsequence"

    def similarity(self, query: str, target: str) -> float:
        matched = 0
        position = 0
        for char in query:
            found = target.find(char, position)
            if found == -1:
                continue
            matched += 1
            position = found + 1
        return SUBSEQUENCE_WEIGHT * matched / len(query)


ALGORITHMS: dict[str, type[MatchingAlgorithm]] = {
    cls.name: cls
    for cls in (
        ExactMatcher,
        PrefixMatcher,
        SubstringMatcher,
        LevenshteinMatcher,
        SubsequenceMatcher,
    )
}


def get_algorithms(names: list[str]) -> list[MatchingAlgorithm]:
    """Instantiate algorithms by name.

    Raises:
        KeyError: If a name is not a known algorithm
    """
    return [ALGORITHMS[name]() for name in names]
