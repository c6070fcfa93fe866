"""Profile sources consumed by the detection and matching engines."""

from collections.abc import Iterable
from typing import Protocol

from gitsetup.exceptions import ProfileNotFoundError
from gitsetup.profiles.models import Profile


class ProfileStore(Protocol):
    """Read-only source of profiles."""

    def list_profiles(self) -> list[Profile]: ...


class InMemoryProfileStore:
    """Profile store over a fixed list, e.g. the profiles of a loaded config."""

    def __init__(self, profiles: Iterable[Profile] = ()) -> None:
        self._profiles = list(profiles)

    def list_profiles(self) -> list[Profile]:
        return list(self._profiles)

    def get(self, name: str) -> Profile:
        """Look up a profile by exact name.

        Raises:
            ProfileNotFoundError: If no profile has that name
        """
        for profile in self._profiles:
            if profile.name == name:
                return profile
        available = ", ".join(p.name for p in self._profiles) or "none"
        raise ProfileNotFoundError(
            f"Profile '{name}' not found",
            details=f"Available profiles: {available}",
            fix_hint=f"Run 'gitsetup match {name}' to search by partial name",
        )
