"""Tests for the individual detection rules.

Each rule is a pure function of (context, profile), so these tests build
contexts directly and need no repository accessor.
"""

from pathlib import Path

import pytest

from gitsetup.config.models import DetectionConfig
from gitsetup.detection.context import RepositoryContext
from gitsetup.detection.rules import (
    RULES,
    RuleKind,
    RulePriority,
    enabled_rules,
    get_rule,
    is_within,
    match_directory,
    match_git_config,
    match_hostname,
    match_include_if,
    match_remote_url,
    score_url,
)
from gitsetup.profiles.models import Profile


def make_profile(**kwargs) -> Profile:
    kwargs.setdefault("name", "p")
    kwargs.setdefault("git_user_email", "p@example.com")
    return Profile(**kwargs)


def make_context(
    path: str = "/home/user/code/app",
    remotes: dict[str, str] | None = None,
    config: dict[str, str] | None = None,
    hostname: str = "laptop",
) -> RepositoryContext:
    return RepositoryContext(
        working_dir=Path(path),
        remotes=remotes or {},
        local_config=config or {},
        hostname=hostname,
    )


class TestRemoteUrlRule:
    """Tests for the remote-URL rule."""

    def test_literal_match_scores_one(self) -> None:
        profile = make_profile(repos=["git@github.com:acme/widgets.git"])
        context = make_context(remotes={"origin": "git@github.com:acme/widgets.git"})

        result = match_remote_url(context, profile)

        assert result is not None
        assert result.confidence == 1.0
        assert "origin" in result.evidence

    def test_literal_match_ignores_git_suffix(self) -> None:
        assert score_url("https://github.com/acme/widgets", "https://github.com/acme/widgets.git") == 1.0

    def test_namespace_glob_scores_one(self) -> None:
        """A pattern fixing host and owner is as decisive as a literal URL."""
        profile = make_profile(repos=["git@github.com:acme/*"])
        context = make_context(remotes={"origin": "git@github.com:acme/widgets.git"})

        result = match_remote_url(context, profile)

        assert result is not None
        assert result.confidence == 1.0

    def test_broad_glob_scores_lower(self) -> None:
        profile = make_profile(repos=["*github.com*"])
        context = make_context(remotes={"origin": "git@github.com:acme/widgets.git"})

        result = match_remote_url(context, profile)

        assert result is not None
        assert result.confidence == 0.8

    def test_best_score_across_remotes_and_patterns(self) -> None:
        profile = make_profile(repos=["*github.com*", "https://gitlab.com/acme/app"])
        context = make_context(
            remotes={
                "origin": "git@github.com:acme/widgets.git",
                "mirror": "https://gitlab.com/acme/app.git",
            }
        )

        result = match_remote_url(context, profile)

        assert result is not None
        assert result.confidence == 1.0
        assert "mirror" in result.evidence

    def test_push_url_is_considered(self) -> None:
        profile = make_profile(repos=["git@github.com:acme/*"])
        context = make_context(
            remotes={"origin": "https://example.com/acme/app"},
            config={"remote.origin.pushurl": "git@github.com:acme/app.git"},
        )

        result = match_remote_url(context, profile)

        assert result is not None
        assert result.confidence == 1.0

    def test_no_match_returns_none(self) -> None:
        profile = make_profile(repos=["git@github.com:acme/*"])
        context = make_context(remotes={"origin": "git@github.com:other/app.git"})

        assert match_remote_url(context, profile) is None

    def test_profile_without_repos_does_not_apply(self) -> None:
        context = make_context(remotes={"origin": "git@github.com:acme/app.git"})

        assert match_remote_url(context, make_profile()) is None


class TestDirectoryRule:
    """Tests for the directory-pattern rule."""

    def test_working_directory_match(self) -> None:
        profile = make_profile(match_patterns=["*/work/*"])

        result = match_directory(make_context("/home/user/work/project"), profile)

        assert result is not None
        assert result.confidence == 0.8

    def test_parent_match_scores_by_depth(self) -> None:
        profile = make_profile(match_patterns=["/home/user/work"])

        near = match_directory(make_context("/home/user/work/project"), profile)
        far = match_directory(make_context("/home/user/work/project/src/lib"), profile)

        assert near is not None and near.confidence == pytest.approx(0.7)
        assert far is not None and far.confidence == pytest.approx(0.5)

    def test_parent_score_has_floor(self) -> None:
        profile = make_profile(match_patterns=["/a"])

        result = match_directory(make_context("/a/b/c/d/e/f/g/h"), profile)

        assert result is not None
        assert result.confidence == pytest.approx(0.4)

    def test_no_patterns_does_not_apply(self) -> None:
        assert match_directory(make_context(), make_profile()) is None

    def test_no_match(self) -> None:
        profile = make_profile(match_patterns=["*/work/*"])

        assert match_directory(make_context("/tmp/random"), profile) is None

    def test_bare_name_matches_directory_itself(self) -> None:
        """A pattern without separators is matched against directory names."""
        profile = make_profile(match_patterns=["work"])

        result = match_directory(make_context("/home/user/work"), profile)

        assert result is not None
        assert result.confidence == 0.8

    def test_bare_name_matches_ancestor(self) -> None:
        profile = make_profile(match_patterns=["clients-*"])

        result = match_directory(make_context("/srv/clients-acme/app/src"), profile)

        assert result is not None
        assert result.confidence == pytest.approx(0.6)
        assert "clients-acme" in result.evidence


class TestIncludeIfRule:
    """Tests for the include-if directory rule."""

    @pytest.mark.parametrize(
        "path",
        ["/home/user/personal", "/home/user/personal/project", "/home/user/personal/a/b"],
    )
    def test_inside_directory(self, path: str) -> None:
        profile = make_profile(include_if_dirs=["/home/user/personal/"])

        result = match_include_if(make_context(path), profile)

        assert result is not None
        assert result.confidence == 1.0

    def test_separator_boundary(self) -> None:
        """A sibling sharing a name prefix is not nested."""
        profile = make_profile(include_if_dirs=["/home/user/personal"])

        assert match_include_if(make_context("/home/user/personal-old/x"), profile) is None

    def test_home_expansion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/user")

        assert is_within(Path("/home/user/oss/tool"), "~/oss") is True

    def test_relative_directory_never_matches(self) -> None:
        assert is_within(Path("/home/user/oss"), "oss") is False

    def test_unknown_user_home_never_matches(self) -> None:
        """An entry like ~nosuchuser/work is skipped, not fatal."""
        profile = make_profile(include_if_dirs=["~nosuchuser-gitsetup/work", "/srv/code"])

        assert is_within(Path("/srv/code/app"), "~nosuchuser-gitsetup/work") is False
        assert match_include_if(make_context("/srv/code/app"), profile) is not None

    def test_no_dirs_does_not_apply(self) -> None:
        assert match_include_if(make_context(), make_profile()) is None


class TestHostnameRule:
    """Tests for the hostname rule."""

    def test_exact_hostname(self) -> None:
        profile = make_profile(host_patterns=["Laptop"])

        result = match_hostname(make_context(hostname="laptop"), profile)

        assert result is not None
        assert result.confidence == 0.9

    def test_glob_hostname(self) -> None:
        profile = make_profile(host_patterns=["test-*"])

        result = match_hostname(make_context(hostname="test-box"), profile)

        assert result is not None
        assert result.confidence == 0.7

    def test_exact_beats_earlier_glob(self) -> None:
        profile = make_profile(host_patterns=["test-*", "test-box"])

        result = match_hostname(make_context(hostname="test-box"), profile)

        assert result is not None
        assert result.confidence == 0.9

    def test_no_patterns_does_not_apply(self) -> None:
        assert match_hostname(make_context(), make_profile()) is None


class TestGitConfigRule:
    """Tests for the existing-local-config rule."""

    def test_email_and_name_match(self) -> None:
        profile = make_profile(git_user_email="a@x.com", git_user_name="A")
        context = make_context(config={"user.email": "a@x.com", "user.name": "A"})

        result = match_git_config(context, profile)

        assert result is not None
        assert result.confidence == 1.0

    def test_email_match_without_profile_user_name(self) -> None:
        profile = make_profile(git_user_email="a@x.com")
        context = make_context(config={"user.email": "a@x.com"})

        result = match_git_config(context, profile)

        assert result is not None
        assert result.confidence == 1.0

    @pytest.mark.parametrize(
        "config",
        [
            {"user.email": "a@x.com", "user.name": "Someone Else"},
            {"user.email": "other@x.com", "user.name": "A"},
            {"user.email": "a@x.com"},
        ],
    )
    def test_single_match_scores_half(self, config: dict[str, str]) -> None:
        profile = make_profile(git_user_email="a@x.com", git_user_name="A")

        result = match_git_config(make_context(config=config), profile)

        assert result is not None
        assert result.confidence == 0.5

    def test_no_identity_configured_does_not_apply(self) -> None:
        assert match_git_config(make_context(), make_profile()) is None

    def test_nothing_matches(self) -> None:
        context = make_context(config={"user.email": "b@x.com", "user.name": "B"})

        assert match_git_config(context, make_profile(git_user_name="A")) is None


class TestRuleSet:
    """Tests for rule ordering and configuration toggles."""

    def test_every_kind_has_one_rule(self) -> None:
        assert sorted(rule.kind for rule in RULES) == sorted(RuleKind)

    def test_evaluation_order_follows_priority(self) -> None:
        names = [rule.name for rule in enabled_rules(DetectionConfig())]

        assert names == [
            "remote_url",
            "include_if_dir",
            "directory_path",
            "hostname",
            "git_config",
        ]
        priorities = [rule.priority for rule in enabled_rules(DetectionConfig())]
        assert priorities == sorted(priorities, reverse=True)

    def test_disabled_rules_are_excluded(self) -> None:
        config = DetectionConfig(
            check_remote_url=True,
            check_directory=False,
            check_include_if=True,
            check_hostname=False,
            check_git_config=True,
        )

        names = [rule.name for rule in enabled_rules(config)]

        assert names == ["remote_url", "include_if_dir", "git_config"]

    def test_tiers(self) -> None:
        assert get_rule(RuleKind.REMOTE_URL).priority is RulePriority.CRITICAL
        assert get_rule(RuleKind.INCLUDE_IF_DIR).priority is RulePriority.HIGH
        assert get_rule(RuleKind.GIT_CONFIG).priority is RulePriority.LOW
