"""Configuration file loading.

Supports YAML and TOML files with automatic format detection by
extension, and reports errors with the offending file and a fix hint.
"""

import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from gitsetup.config.models import GitSetupSettings
from gitsetup.exceptions import ConfigurationError

SEARCH_PATHS = [
    "gitsetup.yml",
    "gitsetup.yaml",
    ".gitsetup.yml",
    "gitsetup.toml",
]


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML as dictionary

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data else {}
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Create the file or run 'gitsetup init-config' to generate one",
        ) from None
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML configuration file.

    Args:
        path: Path to the TOML file

    Returns:
        Parsed TOML as dictionary

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
            return data
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Create the file or run 'gitsetup init-config' to generate one",
        ) from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e


def find_config(project_root: Path | None = None) -> Path | None:
    """Return the first existing file from SEARCH_PATHS under project_root."""
    if project_root is None:
        project_root = Path.cwd()
    for search_path in SEARCH_PATHS:
        candidate = project_root / search_path
        if candidate.exists():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    project_root: Path | None = None,
) -> GitSetupSettings:
    """Load gitsetup configuration from file.

    Search order if path not specified: gitsetup.yml, gitsetup.yaml,
    .gitsetup.yml, gitsetup.toml.

    Args:
        path: Explicit path to config file
        project_root: Directory searched when path is None (defaults to cwd)

    Returns:
        Validated GitSetupSettings instance

    Raises:
        ConfigurationError: If config not found or invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path: Path | None = None
    if path:
        config_path = Path(path).expanduser()
        if not config_path.is_absolute():
            config_path = project_root / config_path
    else:
        config_path = find_config(project_root)

    if config_path is None:
        raise ConfigurationError(
            "No configuration file found",
            details=f"Searched in {project_root}: {', '.join(SEARCH_PATHS)}",
            fix_hint="Run 'gitsetup init-config' to create a configuration file",
        )

    if config_path.suffix in (".yml", ".yaml"):
        data = load_yaml(config_path)
    elif config_path.suffix == ".toml":
        data = load_toml(config_path)
    else:
        raise ConfigurationError(
            f"Unsupported config format: {config_path.suffix}",
            fix_hint="Use .yml, .yaml, or .toml extension",
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in {config_path}",
            details=f"Expected a mapping at the top level, got {type(data).__name__}",
        )

    try:
        return GitSetupSettings(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e
