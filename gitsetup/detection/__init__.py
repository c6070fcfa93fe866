"""Automatic profile detection from repository context."""

from gitsetup.detection.context import (
    ContextExtractor,
    RepositoryAccessor,
    RepositoryContext,
    system_hostname,
)
from gitsetup.detection.detector import (
    AutoDetector,
    DetectionResult,
    MatchedRule,
    rank,
)
from gitsetup.detection.glob import glob_match
from gitsetup.detection.rules import (
    RULES,
    DetectionRule,
    RuleKind,
    RuleMatch,
    RulePriority,
    enabled_rules,
)

__all__ = [
    "AutoDetector",
    "ContextExtractor",
    "DetectionResult",
    "DetectionRule",
    "MatchedRule",
    "RepositoryAccessor",
    "RepositoryContext",
    "RULES",
    "RuleKind",
    "RuleMatch",
    "RulePriority",
    "enabled_rules",
    "glob_match",
    "rank",
    "system_hostname",
]
