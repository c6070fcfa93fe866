"""Pydantic v2 configuration models for gitsetup.yml.

Every field has a safe default, so `DetectionConfig()` and `MatchConfig()`
always construct. The root settings model accepts environment overrides
with the GITSETUP_ prefix.
"""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from gitsetup.profiles.models import Profile

AlgorithmName = Literal["exact", "prefix", "substring", "levenshtein", "subsequence"]


class DetectionConfig(BaseModel):
    """Auto-detection rule toggles, confidence floor and result cache."""

    min_confidence: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Results below this confidence are discarded",
    )
    check_remote_url: bool = Field(default=True, description="Match remote URLs")
    check_directory: bool = Field(default=True, description="Match directory globs")
    check_include_if: bool = Field(
        default=True,
        description="Match include-if directories",
    )
    check_hostname: bool = Field(default=True, description="Match hostname globs")
    check_git_config: bool = Field(
        default=True,
        description="Match identity already in the local git config",
    )
    enable_cache: bool = Field(default=True, description="Cache detection results")
    cache_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Lifetime of a cached detection result",
    )
    cache_max_entries: int = Field(
        default=256,
        ge=1,
        description="Maximum cached detection results (fixed per detector)",
    )


class MatchConfig(BaseModel):
    """Fuzzy profile lookup configuration."""

    match_name: bool = Field(default=True, description="Search profile names")
    match_user_name: bool = Field(default=True, description="Search git user names")
    match_email: bool = Field(default=True, description="Search git user emails")
    match_vault_name: bool = Field(default=True, description="Search vault names")
    match_ssh_key_title: bool = Field(
        default=True,
        description="Search SSH key titles",
    )
    min_score: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Minimum aggregate score (results are always > 0)",
    )
    max_results: int | None = Field(
        default=None,
        ge=1,
        description="Maximum results returned (None for unlimited)",
    )
    algorithms: list[AlgorithmName] = Field(
        default_factory=lambda: ["exact", "prefix", "substring", "levenshtein"],
        min_length=1,
        description="Scoring algorithms run against every field",
    )


class GitSetupSettings(BaseSettings):
    """Root configuration model for gitsetup.yml.

    Example override: GITSETUP_DETECTION__MIN_CONFIDENCE=0.8
    """

    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    matching: MatchConfig = Field(default_factory=MatchConfig)
    profiles: list[Profile] = Field(default_factory=list)

    model_config = {
        "env_prefix": "GITSETUP_",
        "env_nested_delimiter": "__",
    }
