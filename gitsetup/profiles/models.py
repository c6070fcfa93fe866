"""Pydantic model for a git identity profile.

A profile bundles the user name, email and signing setup applied to a
repository, plus the patterns used to auto-detect where it belongs.
Profiles are frozen: the engines read them and never mutate them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class KeyType(str, Enum):
    """Commit signing mechanism."""

    SSH = "ssh"
    GPG = "gpg"
    X509 = "x509"
    GITSIGN = "gitsign"


class Scope(str, Enum):
    """Git config scope a profile is applied to."""

    LOCAL = "local"
    GLOBAL = "global"
    SYSTEM = "system"


class Profile(BaseModel):
    """A named git identity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Unique profile name")
    git_user_name: str | None = Field(default=None, description="user.name")
    git_user_email: str = Field(description="user.email")
    key_type: KeyType = Field(default=KeyType.SSH, description="Signing key type")
    signing_key: str | None = Field(default=None, description="user.signingkey")
    vault_name: str | None = Field(
        default=None,
        description="Password manager vault holding the signing key",
    )
    ssh_key_title: str | None = Field(
        default=None,
        description="Title of the SSH key item in the vault",
    )
    scope: Scope = Field(default=Scope.LOCAL, description="Config scope")
    repos: list[str] = Field(
        default_factory=list,
        description="Remote URL globs (e.g. git@github.com:acme/*)",
    )
    match_patterns: list[str] = Field(
        default_factory=list,
        description="Working directory globs",
    )
    include_if_dirs: list[str] = Field(
        default_factory=list,
        description="Directories whose subtrees belong to this profile",
    )
    host_patterns: list[str] = Field(
        default_factory=list,
        description="Hostname globs",
    )
    one_password: bool = Field(
        default=False,
        description="Signing key is stored in 1Password",
    )

    @property
    def display_name(self) -> str:
        """Name shown to users: the git user name when set."""
        return self.git_user_name or self.name
