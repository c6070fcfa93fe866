"""Configuration management for gitsetup."""

from gitsetup.config.models import DetectionConfig, GitSetupSettings, MatchConfig

__all__ = [
    "GitSetupSettings",
    "DetectionConfig",
    "MatchConfig",
]
