"""Git access for repository context extraction."""

from gitsetup.git.queries import GitRepository, remotes_from_config

__all__ = [
    "GitRepository",
    "remotes_from_config",
]
