"""Repository context extraction.

A `RepositoryContext` is a snapshot of the observable signals about one
working directory: its remotes, local git config, canonical path and the
machine hostname. It is rebuilt for every detection call.
"""

import hashlib
import json
import logging
import os
import socket
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from gitsetup.exceptions import ContextExtractionError

logger = logging.getLogger(__name__)


class RepositoryAccessor(Protocol):
    """Read-only view of a git repository."""

    def remotes(self, path: Path) -> dict[str, str]: ...

    def local_config(self, path: Path) -> dict[str, str]: ...

    def is_inside_work_tree(self, path: Path) -> bool: ...


HostnameProvider = Callable[[], str]


def system_hostname() -> str:
    """Return the local hostname, or "unknown" if it cannot be read."""
    try:
        return socket.gethostname() or "unknown"
    except OSError:
        return "unknown"


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Expand `~` and return the absolute, symlink-resolved path."""
    return Path(path).expanduser().resolve()


@dataclass(frozen=True)
class RepositoryContext:
    """Signals about a working directory inside a git repository.

    Attributes:
        working_dir: Normalized absolute path
        remotes: Remote name to fetch URL
        local_config: Local git config key to value
        hostname: Local machine hostname
    """

    working_dir: Path
    remotes: Mapping[str, str] = field(default_factory=dict)
    local_config: Mapping[str, str] = field(default_factory=dict)
    hostname: str = "unknown"

    def __post_init__(self) -> None:
        # freeze caller-supplied dicts
        object.__setattr__(self, "working_dir", Path(self.working_dir))
        object.__setattr__(self, "remotes", MappingProxyType(dict(self.remotes)))
        object.__setattr__(
            self, "local_config", MappingProxyType(dict(self.local_config))
        )

    @property
    def current_email(self) -> str | None:
        return self.local_config.get("user.email")

    @property
    def current_name(self) -> str | None:
        return self.local_config.get("user.name")

    def remote_urls(self) -> Iterator[tuple[str, str]]:
        """Yield (remote name, url) for every fetch and push URL."""
        for name in sorted(self.remotes):
            yield name, self.remotes[name]
            push_url = self.local_config.get(f"remote.{name}.pushurl")
            if push_url and push_url != self.remotes[name]:
                yield name, push_url

    def ancestors(self) -> list[Path]:
        """Parent directories, nearest first, excluding the filesystem root."""
        return [p for p in self.working_dir.parents if p != Path(p.anchor)]

    def signature(self) -> str:
        """Stable digest of every signal, used as a cache key."""
        payload = json.dumps(
            {
                "working_dir": str(self.working_dir),
                "remotes": dict(sorted(self.remotes.items())),
                "local_config": dict(sorted(self.local_config.items())),
                "hostname": self.hostname,
            },
            sort_keys=True,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ContextExtractor:
    """Builds a RepositoryContext through an injected repository accessor."""

    def __init__(
        self,
        accessor: RepositoryAccessor,
        hostname_provider: HostnameProvider = system_hostname,
    ) -> None:
        self.accessor = accessor
        self.hostname_provider = hostname_provider

    def extract(self) -> RepositoryContext:
        """Extract the context of the current working directory."""
        return self.extract_in(Path.cwd())

    def extract_in(self, path: str | os.PathLike[str]) -> RepositoryContext:
        """Extract the context of a directory.

        Args:
            path: Directory claimed to be inside a git working tree

        Returns:
            RepositoryContext for the path

        Raises:
            ContextExtractionError: If the path is not inside a work tree or
                the accessor fails
        """
        working_dir = normalize_path(path)

        try:
            inside = self.accessor.is_inside_work_tree(working_dir)
        except Exception as e:
            logger.debug("work tree check failed for %s: %s", working_dir, e)
            raise ContextExtractionError(
                f"Failed to inspect {working_dir}",
                details=str(e),
                fix_hint="Ensure git is installed and the path exists",
            ) from e

        if not inside:
            raise ContextExtractionError(
                f"Not inside a git repository: {working_dir}",
                fix_hint="Run from inside a repository or pass a repository path",
            )

        try:
            remotes = self.accessor.remotes(working_dir)
            local_config = self.accessor.local_config(working_dir)
        except Exception as e:
            logger.debug("reading repository signals failed for %s: %s", working_dir, e)
            raise ContextExtractionError(
                f"Failed to read repository configuration in {working_dir}",
                details=str(e),
                fix_hint=f"Run 'git -C {working_dir} config --local --list' to inspect",
            ) from e

        return RepositoryContext(
            working_dir=working_dir,
            remotes=remotes,
            local_config=local_config,
            hostname=self.hostname_provider(),
        )
