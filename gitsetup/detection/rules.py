"""Detection rules for automatic profile selection.

The rule set is closed: one rule per `RuleKind`, each a pure function of
(context, profile). A rule that has nothing to say about a profile, e.g.
the hostname rule for a profile without host patterns, returns None
rather than a zero score.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from gitsetup.detection.context import RepositoryContext
from gitsetup.detection.glob import glob_match, is_literal, wildcards_in_last_segment
from gitsetup.profiles.models import Profile

if TYPE_CHECKING:
    from gitsetup.config.models import DetectionConfig

logger = logging.getLogger(__name__)

REMOTE_EXACT_SCORE = 1.0
REMOTE_NAMESPACE_SCORE = 1.0
REMOTE_GLOB_SCORE = 0.8
DIRECTORY_SCORE = 0.8
DIRECTORY_PARENT_SCORE = 0.7
DIRECTORY_DEPTH_PENALTY = 0.1
DIRECTORY_MIN_SCORE = 0.4
INCLUDE_IF_SCORE = 1.0
HOSTNAME_EXACT_SCORE = 0.9
HOSTNAME_GLOB_SCORE = 0.7
GIT_CONFIG_FULL_SCORE = 1.0
GIT_CONFIG_PARTIAL_SCORE = 0.5


class RulePriority(IntEnum):
    """Evaluation tier. Orders rules and explanations, never rescales."""

    CRITICAL = 4
    HIGH = 3
    MEDIUM = 2
    LOW = 1


class RuleKind(str, Enum):
    """The fixed set of detection signals."""

    REMOTE_URL = "remote_url"
    INCLUDE_IF_DIR = "include_if_dir"
    DIRECTORY_PATH = "directory_path"
    HOSTNAME = "hostname"
    GIT_CONFIG = "git_config"

    @property
    def config_flag(self) -> str:
        """DetectionConfig attribute that enables this rule."""
        return _CONFIG_FLAGS[self]


_CONFIG_FLAGS = {
    RuleKind.REMOTE_URL: "check_remote_url",
    RuleKind.INCLUDE_IF_DIR: "check_include_if",
    RuleKind.DIRECTORY_PATH: "check_directory",
    RuleKind.HOSTNAME: "check_hostname",
    RuleKind.GIT_CONFIG: "check_git_config",
}


class RuleMatch(NamedTuple):
    """Outcome of a rule that fired."""

    confidence: float
    evidence: str


RuleEvaluator = Callable[[RepositoryContext, Profile], RuleMatch | None]


def _strip_url(url: str) -> str:
    url = url.rstrip("/")
    return url[: -len(".git")] if url.endswith(".git") else url


def score_url(pattern: str, url: str) -> float:
    """Score one remote URL against one repository pattern.

    Returns:
        1.0 for a literal match (ignoring a trailing .git or /), 1.0 for a
        glob whose wildcards only cover the final path segment, 0.8 for
        any other glob match, 0.0 otherwise
    """
    if is_literal(pattern):
        if pattern == url or _strip_url(pattern) == _strip_url(url):
            return REMOTE_EXACT_SCORE
        return 0.0
    if glob_match(pattern, url):
        if wildcards_in_last_segment(pattern):
            return REMOTE_NAMESPACE_SCORE
        return REMOTE_GLOB_SCORE
    return 0.0


def match_remote_url(context: RepositoryContext, profile: Profile) -> RuleMatch | None:
    if not profile.repos:
        return None

    best: RuleMatch | None = None
    for remote_name, url in context.remote_urls():
        for pattern in profile.repos:
            score = score_url(pattern, url)
            if score > 0.0 and (best is None or score > best.confidence):
                best = RuleMatch(
                    score,
                    f"remote '{remote_name}' ({url}) matches '{pattern}'",
                )
    return best


def _path_matches(pattern: str, path: Path) -> bool:
    # whole path, or the final component for bare patterns such as "work"
    return glob_match(pattern, str(path)) or glob_match(pattern, path.name)


def match_directory(context: RepositoryContext, profile: Profile) -> RuleMatch | None:
    """Glob-match the working directory, then its ancestors.

    A pattern matches a directory when it matches the full path or the
    directory's own name, so `work` fires anywhere below a `work` folder.
    """
    if not profile.match_patterns:
        return None

    working_dir = context.working_dir
    for pattern in profile.match_patterns:
        if _path_matches(pattern, working_dir):
            return RuleMatch(
                DIRECTORY_SCORE,
                f"directory {working_dir} matches '{pattern}'",
            )

    # nearest matching ancestor, any pattern
    for depth, parent in enumerate(context.ancestors(), start=1):
        for pattern in profile.match_patterns:
            if _path_matches(pattern, parent):
                score = DIRECTORY_PARENT_SCORE - DIRECTORY_DEPTH_PENALTY * (depth - 1)
                return RuleMatch(
                    max(score, DIRECTORY_MIN_SCORE),
                    f"parent directory {parent} matches '{pattern}'",
                )
    return None


def is_within(path: Path, directory: str) -> bool:
    """True if path equals directory or is nested under it.

    Comparison is on whole path components, so /work does not contain
    /workshop. Relative directories and `~` entries that cannot be
    expanded never contain anything.
    """
    try:
        base = Path(directory).expanduser()
    except RuntimeError:
        logger.debug("cannot expand include-if directory %r", directory)
        return False
    if not base.is_absolute():
        return False
    base = base.resolve()
    return path == base or base in path.parents


def match_include_if(context: RepositoryContext, profile: Profile) -> RuleMatch | None:
    if not profile.include_if_dirs:
        return None

    for directory in profile.include_if_dirs:
        if is_within(context.working_dir, directory):
            return RuleMatch(
                INCLUDE_IF_SCORE,
                f"{context.working_dir} is inside '{directory}'",
            )
    return None


def match_hostname(context: RepositoryContext, profile: Profile) -> RuleMatch | None:
    if not profile.host_patterns:
        return None

    best: RuleMatch | None = None
    for pattern in profile.host_patterns:
        if is_literal(pattern):
            if pattern.casefold() == context.hostname.casefold():
                return RuleMatch(
                    HOSTNAME_EXACT_SCORE,
                    f"hostname '{context.hostname}' is '{pattern}'",
                )
        elif best is None and glob_match(pattern, context.hostname, ignore_case=True):
            best = RuleMatch(
                HOSTNAME_GLOB_SCORE,
                f"hostname '{context.hostname}' matches '{pattern}'",
            )
    return best


def match_git_config(context: RepositoryContext, profile: Profile) -> RuleMatch | None:
    current_email = context.current_email
    current_name = context.current_name
    if current_email is None and current_name is None:
        return None

    email_matches = current_email is not None and current_email == profile.git_user_email
    name_matches = (
        current_name is not None
        and profile.git_user_name is not None
        and current_name == profile.git_user_name
    )

    if email_matches and (name_matches or profile.git_user_name is None):
        return RuleMatch(
            GIT_CONFIG_FULL_SCORE,
            "local git config already uses this identity",
        )
    if email_matches:
        return RuleMatch(GIT_CONFIG_PARTIAL_SCORE, "local user.email matches")
    if name_matches:
        return RuleMatch(GIT_CONFIG_PARTIAL_SCORE, "local user.name matches")
    return None


@dataclass(frozen=True)
class DetectionRule:
    """A detection signal with its tier and evaluator."""

    kind: RuleKind
    priority: RulePriority
    evaluate: RuleEvaluator
    summary: str

    @property
    def name(self) -> str:
        return self.kind.value


# Declaration order breaks ties within a tier.
RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        RuleKind.REMOTE_URL,
        RulePriority.CRITICAL,
        match_remote_url,
        "repository URL matches",
    ),
    DetectionRule(
        RuleKind.INCLUDE_IF_DIR,
        RulePriority.HIGH,
        match_include_if,
        "in configured directory",
    ),
    DetectionRule(
        RuleKind.DIRECTORY_PATH,
        RulePriority.MEDIUM,
        match_directory,
        "directory pattern matches",
    ),
    DetectionRule(
        RuleKind.HOSTNAME,
        RulePriority.MEDIUM,
        match_hostname,
        "hostname matches",
    ),
    DetectionRule(
        RuleKind.GIT_CONFIG,
        RulePriority.LOW,
        match_git_config,
        "git config matches",
    ),
)


def get_rule(kind: RuleKind) -> DetectionRule:
    for rule in RULES:
        if rule.kind is kind:
            return rule
    raise KeyError(kind)


def enabled_rules(config: "DetectionConfig") -> list[DetectionRule]:
    """Rules switched on in config, in evaluation order.

    Evaluation order is priority tier (Critical first), then declaration
    order within a tier.
    """
    ordered = sorted(
        enumerate(RULES),
        key=lambda item: (-item[1].priority, item[0]),
    )
    return [rule for _, rule in ordered if getattr(config, rule.kind.config_flag)]
