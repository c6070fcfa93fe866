"""Read-only git queries used to build a repository context.

`GitRepository` is the concrete repository accessor: every method takes the
path to inspect and shells out to `git -C <path>`. Failures raise GitError.
"""

import subprocess
from pathlib import Path

from gitsetup.exceptions import GitError


class GitRepository:
    """Repository accessor backed by the git command line."""

    def __init__(self, git: str = "git", timeout: int = 10) -> None:
        self.git = git
        self.timeout = timeout

    def _git(self, path: Path, *args: str) -> subprocess.CompletedProcess[str]:
        """Run `git -C path args...` and return the finished process.

        Raises:
            GitError: If git cannot be started or does not finish in time
        """
        cmd = [self.git, "-C", str(path), *args]
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except OSError as e:
            raise GitError(
                "Failed to run git",
                details=str(e),
                fix_hint="Ensure git is installed and on PATH",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise GitError(
                f"git timed out after {self.timeout}s: {' '.join(cmd)}",
                fix_hint="Check for a slow filesystem or a stuck git lock",
            ) from e

    def is_inside_work_tree(self, path: Path) -> bool:
        """Check whether a path lies inside a git working tree.

        Args:
            path: Directory to inspect

        Returns:
            True if git reports the path as inside a work tree

        Raises:
            GitError: If git cannot be executed
        """
        result = self._git(path, "rev-parse", "--is-inside-work-tree")
        return result.returncode == 0 and result.stdout.strip() == "true"

    def local_config(self, path: Path) -> dict[str, str]:
        """Read every key/value from the repository's local config.

        Multi-valued keys keep their last value, as `git config --get` does.

        Args:
            path: Directory inside the repository

        Returns:
            Mapping of config key to value

        Raises:
            GitError: If the config cannot be listed
        """
        result = self._git(path, "config", "--local", "--list", "--null")
        if result.returncode != 0:
            # exit code 1 with no output: the local config file is empty
            if result.returncode == 1 and not result.stderr.strip():
                return {}
            raise GitError(
                f"Failed to read local git config (exit code {result.returncode})",
                details=result.stderr.strip() or None,
                fix_hint=f"Run 'git -C {path} config --local --list' to inspect",
            )

        # --null output: "key\nvalue\0" per entry
        config: dict[str, str] = {}
        for record in result.stdout.split("\0"):
            if not record:
                continue
            key, _, value = record.partition("\n")
            config[key] = value
        return config

    def remotes(self, path: Path) -> dict[str, str]:
        """Get the fetch URL of every configured remote.

        Args:
            path: Directory inside the repository

        Returns:
            Mapping of remote name to URL

        Raises:
            GitError: If the config cannot be listed
        """
        return remotes_from_config(self.local_config(path))


def remotes_from_config(config: dict[str, str]) -> dict[str, str]:
    """Extract `remote.<name>.url` entries from a config mapping."""
    remotes: dict[str, str] = {}
    for key, value in config.items():
        if key.startswith("remote.") and key.endswith(".url"):
            name = key[len("remote.") : -len(".url")]
            if name:
                remotes[name] = value
    return remotes
