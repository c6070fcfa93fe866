"""Pytest fixtures for gitsetup tests.

Provides common fixtures for:
- A fake repository accessor with scripted remotes and config
- A sample profile set
- A real temporary git repository
- Environment isolation for GITSETUP_* overrides
"""

import os
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest

from gitsetup.profiles.models import KeyType, Profile, Scope


class FakeRepository:
    """Repository accessor returning scripted values.

    Records every path it was asked about in `calls`.
    """

    def __init__(
        self,
        remotes: dict[str, str] | None = None,
        config: dict[str, str] | None = None,
        inside: bool = True,
        fail_with: Exception | None = None,
    ) -> None:
        self._remotes = remotes or {}
        self._config = config or {}
        self.inside = inside
        self.fail_with = fail_with
        self.calls: list[Path] = []

    def is_inside_work_tree(self, path: Path) -> bool:
        self.calls.append(path)
        return self.inside

    def remotes(self, path: Path) -> dict[str, str]:
        if self.fail_with is not None:
            raise self.fail_with
        return dict(self._remotes)

    def local_config(self, path: Path) -> dict[str, str]:
        if self.fail_with is not None:
            raise self.fail_with
        return dict(self._config)


@pytest.fixture
def make_repo() -> type[FakeRepository]:
    """Factory for scripted repository accessors."""
    return FakeRepository


@pytest.fixture
def profiles() -> list[Profile]:
    """Work, personal and hostname-bound profiles.

    Returns:
        List of profiles
    """
    return [
        Profile(
            name="work",
            git_user_name="Work User",
            git_user_email="work@company.com",
            repos=["git@github.com:company/*"],
            match_patterns=["*/work/*"],
            key_type=KeyType.SSH,
            vault_name="Company Vault",
            ssh_key_title="Work Laptop Key",
        ),
        Profile(
            name="personal",
            git_user_name="Personal User",
            git_user_email="me@personal.com",
            repos=["git@github.com:myuser/*"],
            include_if_dirs=["/home/user/personal"],
            key_type=KeyType.GPG,
            scope=Scope.GLOBAL,
        ),
        Profile(
            name="hostname-test",
            git_user_name="Hostname User",
            git_user_email="test@hostname.com",
            host_patterns=["test-*"],
        ),
    ]


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository with a user and an origin remote.

    Returns:
        Path to git repository
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    for args in (
        ["git", "init"],
        ["git", "config", "user.email", "work@company.com"],
        ["git", "config", "user.name", "Work User"],
        ["git", "remote", "add", "origin", "git@github.com:company/widgets.git"],
    ):
        subprocess.run(args, cwd=repo, capture_output=True, check=True)
    return repo


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Temporarily remove GITSETUP_* environment variables."""
    old_env = {}
    for key in list(os.environ.keys()):
        if key.startswith("GITSETUP_"):
            old_env[key] = os.environ.pop(key)

    yield

    os.environ.update(old_env)
