"""Auto-detection of the profile that fits a working directory.

Every enabled rule is evaluated against every profile. A profile's
confidence is the confidence of its single strongest rule, so one specific
signal (an exact remote URL) outranks several loose ones. All fired rules
are kept on the result to explain the choice.
"""

import hashlib
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from gitsetup.config.models import DetectionConfig
from gitsetup.detection.cache import TTLCache
from gitsetup.detection.context import (
    ContextExtractor,
    HostnameProvider,
    RepositoryAccessor,
    RepositoryContext,
    system_hostname,
)
from gitsetup.detection.rules import RULES, DetectionRule, RulePriority, enabled_rules
from gitsetup.exceptions import NoProfileMatchError
from gitsetup.profiles.models import Profile
from gitsetup.profiles.store import ProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchedRule:
    """A rule that fired for a profile."""

    rule_name: str
    priority: RulePriority
    confidence: float
    evidence: str = ""


@dataclass(frozen=True)
class DetectionResult:
    """A profile chosen for a context, with the evidence behind it.

    Attributes:
        profile: The detected profile
        confidence: Confidence of the strongest matched rule, in [0, 1]
        matched_rules: Every rule that fired, in evaluation order
        reason: One-line summary of the top signals
        reasons: Evidence text of every matched rule
    """

    profile: Profile
    confidence: float
    matched_rules: tuple[MatchedRule, ...] = ()
    reason: str = ""
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def best_rule(self) -> MatchedRule | None:
        """The rule that set the confidence."""
        if not self.matched_rules:
            return None
        return max(self.matched_rules, key=lambda r: (r.confidence, r.priority))


def _rank_key(result: DetectionResult) -> tuple[float, str]:
    return (-result.confidence, result.profile.name)


def profile_set_signature(profiles: Sequence[Profile]) -> str:
    """Digest of the profile set; changes whenever any profile changes."""
    digest = hashlib.sha256()
    for profile in profiles:
        digest.update(profile.model_dump_json().encode("utf-8"))
        digest.update(b"\0")
    return digest.hexdigest()


def build_reason(profile: Profile, matched: Sequence[MatchedRule]) -> str:
    """Summarise the two strongest signals, by tier then confidence."""
    summaries = {rule.name: rule.summary for rule in RULES}
    top = sorted(matched, key=lambda r: (-r.priority, -r.confidence))[:2]
    parts = [summaries[r.rule_name] for r in top if r.rule_name in summaries]
    if not parts:
        return f"Profile '{profile.name}' detected"
    return f"Profile '{profile.name}' detected: {', '.join(parts)}"


def score_profile(
    profile: Profile,
    context: RepositoryContext,
    rules: Sequence[DetectionRule],
) -> DetectionResult | None:
    """Evaluate rules for one profile; None if no rule fired."""
    matched: list[MatchedRule] = []
    for rule in rules:
        outcome = rule.evaluate(context, profile)
        if outcome is None:
            continue
        confidence = min(max(outcome.confidence, 0.0), 1.0)
        logger.debug(
            "rule %s fired for profile %s: %.2f (%s)",
            rule.name,
            profile.name,
            confidence,
            outcome.evidence,
        )
        matched.append(
            MatchedRule(
                rule_name=rule.name,
                priority=rule.priority,
                confidence=confidence,
                evidence=outcome.evidence,
            )
        )

    if not matched:
        return None

    return DetectionResult(
        profile=profile,
        confidence=max(m.confidence for m in matched),
        matched_rules=tuple(matched),
        reason=build_reason(profile, matched),
        reasons=tuple(m.evidence for m in matched),
    )


def rank(
    context: RepositoryContext,
    profiles: Sequence[Profile],
    config: DetectionConfig,
) -> list[DetectionResult]:
    """Score every profile and return those above the floor, best first.

    Ties on confidence are broken by profile name ascending.
    """
    rules = enabled_rules(config)
    results = []
    for profile in profiles:
        result = score_profile(profile, context, rules)
        if result is not None and result.confidence >= config.min_confidence:
            results.append(result)
    results.sort(key=_rank_key)
    return results


class AutoDetector:
    """Selects profiles for repository contexts.

    The profile store is queried on every call; nothing about the profile
    set is remembered apart from the optional result cache, whose key
    covers the context, the profile set and the configuration.
    """

    def __init__(
        self,
        profiles: ProfileStore,
        accessor: RepositoryAccessor,
        config: DetectionConfig | None = None,
        hostname_provider: HostnameProvider = system_hostname,
    ) -> None:
        self.profiles = profiles
        self.config = config or DetectionConfig()
        self.extractor = ContextExtractor(accessor, hostname_provider)
        self._cache: TTLCache[tuple[DetectionResult, ...]] = TTLCache(
            ttl=self.config.cache_ttl_seconds,
            max_size=self.config.cache_max_entries,
        )

    def detect(self, config: DetectionConfig | None = None) -> DetectionResult | None:
        """Best profile for the current working directory."""
        return self.detect_in(Path.cwd(), config)

    def detect_in(
        self,
        path: str | os.PathLike[str],
        config: DetectionConfig | None = None,
    ) -> DetectionResult | None:
        """Best profile for a directory, or None if nothing clears the floor.

        Raises:
            ContextExtractionError: If the path is not inside a repository
        """
        results = self.detect_all(config, path=path)
        return results[0] if results else None

    def detect_all(
        self,
        config: DetectionConfig | None = None,
        path: str | os.PathLike[str] | None = None,
    ) -> list[DetectionResult]:
        """Every profile above the floor, ranked, for a directory.

        Args:
            config: Overrides the detector's configuration for this call.
                Its cache_ttl_seconds applies to the entry stored by this
                call; cache_max_entries is fixed when the detector is built
            path: Directory to inspect (defaults to the current directory)

        Returns:
            Ranked results, possibly empty

        Raises:
            ContextExtractionError: If the path is not inside a repository
        """
        if path is None:
            context = self.extractor.extract()
        else:
            context = self.extractor.extract_in(path)
        return self.rank_context(context, config)

    def detect_profile(
        self,
        context: RepositoryContext,
        config: DetectionConfig | None = None,
    ) -> DetectionResult:
        """Best profile for an already extracted context.

        Raises:
            NoProfileMatchError: If no profile clears the floor
        """
        results = self.rank_context(context, config)
        if not results:
            cfg = config or self.config
            raise NoProfileMatchError(
                f"No profile matches {context.working_dir}",
                details=(
                    "No profile reached the minimum confidence of "
                    f"{cfg.min_confidence:.2f}"
                ),
                fix_hint="Add a repos or match_patterns entry to a profile",
            )
        return results[0]

    def rank_context(
        self,
        context: RepositoryContext,
        config: DetectionConfig | None = None,
    ) -> list[DetectionResult]:
        """Rank the store's current profiles against a context."""
        cfg = config or self.config
        profiles = self.profiles.list_profiles()

        if not cfg.enable_cache:
            return rank(context, profiles, cfg)

        key = (
            context.signature(),
            profile_set_signature(profiles),
            cfg.model_dump_json(),
        )
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("detection cache hit for %s", context.working_dir)
            return list(cached)

        results = rank(context, profiles, cfg)
        self._cache.set(key, tuple(results), ttl=cfg.cache_ttl_seconds)
        return results

    def clear_cache(self) -> None:
        self._cache.clear()
