"""Fuzzy profile lookup across weighted profile fields.

Each searchable field is scored with every configured algorithm, keeping
the best algorithm's score. A profile's score is the best weighted field
score, so one strongly matching field beats several weak ones.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from gitsetup.config.models import MatchConfig
from gitsetup.matching.algorithms import MatchingAlgorithm, get_algorithms, normalize
from gitsetup.profiles.models import Profile

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE_THRESHOLD = 0.8
EXACT_THRESHOLD = 0.99


class SearchField(str, Enum):
    """Profile fields searched by the fuzzy matcher."""

    NAME = "name"
    USER_NAME = "user_name"
    EMAIL = "email"
    VAULT_NAME = "vault_name"
    SSH_KEY_TITLE = "ssh_key_title"

    @property
    def weight(self) -> float:
        """How decisive a match on this field is."""
        return _FIELD_WEIGHTS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def config_flag(self) -> str:
        return f"match_{self.value}"

    def value_of(self, profile: Profile) -> str | None:
        return getattr(profile, _PROFILE_ATTRS[self])


_FIELD_WEIGHTS = {
    SearchField.NAME: 1.0,
    SearchField.USER_NAME: 0.8,
    SearchField.EMAIL: 0.6,
    SearchField.VAULT_NAME: 0.4,
    SearchField.SSH_KEY_TITLE: 0.3,
}

_DISPLAY_NAMES = {
    SearchField.NAME: "name",
    SearchField.USER_NAME: "user name",
    SearchField.EMAIL: "email",
    SearchField.VAULT_NAME: "vault name",
    SearchField.SSH_KEY_TITLE: "SSH key title",
}

_PROFILE_ATTRS = {
    SearchField.NAME: "name",
    SearchField.USER_NAME: "git_user_name",
    SearchField.EMAIL: "git_user_email",
    SearchField.VAULT_NAME: "vault_name",
    SearchField.SSH_KEY_TITLE: "ssh_key_title",
}


@dataclass(frozen=True)
class FieldMatch:
    """Score of the query against one profile field.

    Attributes:
        field: Which field was scored
        score: Raw score before weighting, in [0, 1]
        matched_text: The query, when it occurs verbatim in the field
        algorithm: Name of the algorithm that produced the score
    """

    field: SearchField
    score: float
    matched_text: str | None = None
    algorithm: str = ""

    @property
    def weight(self) -> float:
        return self.field.weight

    @property
    def weighted_score(self) -> float:
        return self.score * self.field.weight


@dataclass(frozen=True)
class MatchResult:
    """A profile scored against a query."""

    profile: Profile
    score: float
    algorithm: str
    field_matches: tuple[FieldMatch, ...] = ()

    def is_exact(self) -> bool:
        return self.score >= EXACT_THRESHOLD

    def is_high_confidence(self) -> bool:
        return self.score >= HIGH_CONFIDENCE_THRESHOLD

    def primary_field(self) -> FieldMatch | None:
        """The field that set the aggregate score."""
        if not self.field_matches:
            return None
        return max(self.field_matches, key=lambda fm: fm.weighted_score)


class ProfileFuzzyMatcher:
    """Ranks profiles against a free-text query."""

    def __init__(
        self,
        config: MatchConfig | None = None,
        algorithms: Sequence[MatchingAlgorithm] | None = None,
    ) -> None:
        self.config = config or MatchConfig()
        if algorithms is None:
            algorithms = get_algorithms(list(self.config.algorithms))
        self.algorithms = list(algorithms)

    def searchable_fields(self) -> list[SearchField]:
        return [f for f in SearchField if getattr(self.config, f.config_flag)]

    def score_field(
        self, query: str, value: str, search_field: SearchField
    ) -> FieldMatch | None:
        """Best score over all algorithms; None when every algorithm gives 0."""
        best_score = 0.0
        best_algorithm = ""
        for algorithm in self.algorithms:
            score = algorithm.score(query, value)
            if score > best_score:
                best_score = score
                best_algorithm = algorithm.name

        if best_score <= 0.0:
            return None

        matched_text = query if normalize(query) in normalize(value) else None
        return FieldMatch(
            field=search_field,
            score=best_score,
            matched_text=matched_text,
            algorithm=best_algorithm,
        )

    def score_profile(self, query: str, profile: Profile) -> MatchResult | None:
        field_matches = []
        for search_field in self.searchable_fields():
            value = search_field.value_of(profile)
            if not value:
                continue
            field_match = self.score_field(query, value, search_field)
            if field_match is not None:
                field_matches.append(field_match)

        if not field_matches:
            return None

        primary = max(field_matches, key=lambda fm: fm.weighted_score)
        return MatchResult(
            profile=profile,
            score=min(primary.weighted_score, 1.0),
            algorithm=primary.algorithm,
            field_matches=tuple(field_matches),
        )

    def find_matches(self, query: str, profiles: Sequence[Profile]) -> list[MatchResult]:
        """Every profile with a positive score, best first.

        Ties are broken by profile name ascending. An empty query matches
        nothing.
        """
        if not normalize(query):
            return []

        results = []
        for profile in profiles:
            result = self.score_profile(query, profile)
            if result is None or result.score <= 0.0:
                continue
            if result.score >= self.config.min_score:
                results.append(result)

        results.sort(key=lambda r: (-r.score, r.profile.name))
        logger.debug(
            "query %r matched %d of %d profiles", query, len(results), len(profiles)
        )

        if self.config.max_results is not None:
            results = results[: self.config.max_results]
        return results

    def find_best_match(
        self, query: str, profiles: Sequence[Profile]
    ) -> MatchResult | None:
        """The top match if it is high-confidence, otherwise None.

        None means the caller should ask the user to pick.
        """
        matches = self.find_matches(query, profiles)
        if matches and matches[0].is_high_confidence():
            return matches[0]
        return None
