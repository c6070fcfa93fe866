"""Default configuration file generation."""

from pathlib import Path

import yaml

from gitsetup.config.models import DetectionConfig, MatchConfig
from gitsetup.exceptions import ConfigurationError

HEADER = """\
# gitsetup configuration
#
# Profiles are matched against the current repository by remote URL,
# directory, include-if directory, hostname and existing git config.
# Any value can be overridden from the environment, for example:
#   GITSETUP_DETECTION__MIN_CONFIDENCE=0.8
"""

EXAMPLE_PROFILES = [
    {
        "name": "work",
        "git_user_name": "Jane Doe",
        "git_user_email": "jane.doe@company.example",
        "key_type": "ssh",
        "repos": ["git@github.com:company/*"],
        "match_patterns": ["*/work/*"],
    },
    {
        "name": "personal",
        "git_user_name": "Jane Doe",
        "git_user_email": "jane@personal.example",
        "key_type": "gpg",
        "include_if_dirs": ["~/personal"],
    },
]


def generate_default_config() -> str:
    """Render the default configuration as YAML text."""
    data = {
        "detection": DetectionConfig().model_dump(),
        "matching": MatchConfig().model_dump(),
        "profiles": EXAMPLE_PROFILES,
    }
    return HEADER + "\n" + yaml.safe_dump(data, sort_keys=False)


def write_default_config(path: Path, force: bool = False) -> Path:
    """Write the default configuration file.

    Args:
        path: Destination file
        force: Overwrite an existing file

    Returns:
        The path written

    Raises:
        ConfigurationError: If the file exists and force is False
    """
    if path.exists() and not force:
        raise ConfigurationError(
            f"Configuration file already exists: {path}",
            fix_hint="Use --force to overwrite it",
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_default_config(), encoding="utf-8")
    return path
