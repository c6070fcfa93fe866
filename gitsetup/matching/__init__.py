"""Fuzzy profile lookup."""

from gitsetup.matching.algorithms import (
    ALGORITHMS,
    ExactMatcher,
    LevenshteinMatcher,
    MatchingAlgorithm,
    PrefixMatcher,
    SubsequenceMatcher,
    SubstringMatcher,
)
from gitsetup.matching.matcher import (
    FieldMatch,
    MatchResult,
    ProfileFuzzyMatcher,
    SearchField,
)

__all__ = [
    "ALGORITHMS",
    "ExactMatcher",
    "FieldMatch",
    "LevenshteinMatcher",
    "MatchResult",
    "MatchingAlgorithm",
    "PrefixMatcher",
    "ProfileFuzzyMatcher",
    "SearchField",
    "SubsequenceMatcher",
    "SubstringMatcher",
]
