"""Unit tests for configuration models.

Tests cover:
- Defaults for detection and matching
- Field validation bounds
- Environment overrides via GITSETUP_ prefix
"""

import pytest
from pydantic import ValidationError

from gitsetup.config.models import DetectionConfig, GitSetupSettings, MatchConfig


class TestDetectionConfig:
    """Tests for DetectionConfig."""

    def test_defaults(self) -> None:
        """All rules are enabled with a 0.6 floor and caching on."""
        config = DetectionConfig()
        assert config.min_confidence == 0.6
        assert config.check_remote_url
        assert config.check_directory
        assert config.check_include_if
        assert config.check_hostname
        assert config.check_git_config
        assert config.enable_cache
        assert config.cache_ttl_seconds == 300.0

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_min_confidence_bounds(self, value: float) -> None:
        """min_confidence outside [0, 1] is rejected."""
        with pytest.raises(ValidationError):
            DetectionConfig(min_confidence=value)

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            DetectionConfig(cache_ttl_seconds=0)


class TestMatchConfig:
    """Tests for MatchConfig."""

    def test_defaults(self) -> None:
        """Every field is searched with the four standard algorithms."""
        config = MatchConfig()
        assert config.match_name and config.match_ssh_key_title
        assert config.min_score == 0.0
        assert config.max_results is None
        assert config.algorithms == ["exact", "prefix", "substring", "levenshtein"]

    def test_unknown_algorithm_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchConfig(algorithms=["soundex"])

    def test_empty_algorithms_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchConfig(algorithms=[])

    def test_max_results_positive(self) -> None:
        with pytest.raises(ValidationError):
            MatchConfig(max_results=0)


class TestGitSetupSettings:
    """Tests for the root settings model."""

    def test_defaults(self, clean_env: None) -> None:
        """Settings construct with no profiles and default sections."""
        settings = GitSetupSettings()
        assert settings.profiles == []
        assert settings.detection == DetectionConfig()
        assert settings.matching == MatchConfig()

    def test_profiles_parsed(self, clean_env: None) -> None:
        """Profile dictionaries become Profile models."""
        settings = GitSetupSettings(
            profiles=[{"name": "work", "git_user_email": "w@example.com"}]
        )
        assert settings.profiles[0].name == "work"
        assert settings.profiles[0].repos == []

    def test_profile_requires_email(self, clean_env: None) -> None:
        with pytest.raises(ValidationError):
            GitSetupSettings(profiles=[{"name": "work"}])

    def test_env_override(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Nested values can be overridden from the environment."""
        monkeypatch.setenv("GITSETUP_DETECTION__MIN_CONFIDENCE", "0.8")
        monkeypatch.setenv("GITSETUP_MATCHING__MATCH_EMAIL", "false")

        settings = GitSetupSettings()

        assert settings.detection.min_confidence == 0.8
        assert settings.matching.match_email is False
