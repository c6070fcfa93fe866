"""Profile model and profile sources."""

from gitsetup.profiles.models import KeyType, Profile, Scope
from gitsetup.profiles.store import InMemoryProfileStore, ProfileStore

__all__ = [
    "Profile",
    "KeyType",
    "Scope",
    "ProfileStore",
    "InMemoryProfileStore",
]
