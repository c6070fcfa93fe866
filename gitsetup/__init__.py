"""Git identity profile detection and fuzzy profile lookup."""

__version__ = "0.1.0"

from gitsetup.exceptions import (
    ConfigurationError,
    ContextExtractionError,
    GitError,
    GitSetupError,
    NoProfileMatchError,
    ProfileNotFoundError,
)

__all__ = [
    "__version__",
    "GitSetupError",
    "ConfigurationError",
    "GitError",
    "ContextExtractionError",
    "NoProfileMatchError",
    "ProfileNotFoundError",
]
