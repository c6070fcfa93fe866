"""Custom exception hierarchy for gitsetup.

Exit codes follow Unix conventions:
- 1: General error
- 2: Configuration error
- 4: Git error
- 5: Context extraction error
- 6: No matching profile
- 7: Profile not found
"""


class GitSetupError(Exception):
    """Base exception for all gitsetup errors.

    Each subclass defines an exit_code for CLI error reporting.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(GitSetupError):
    """Configuration file errors.

    Raised when:
    - Config file not found
    - Config file has invalid syntax (YAML/TOML)
    - Config values fail validation
    """

    exit_code = 2


class GitError(GitSetupError):
    """Git command failures."""

    exit_code = 4


class ContextExtractionError(GitSetupError):
    """Repository context could not be read.

    Raised when:
    - The path is not inside a git working tree
    - The repository accessor fails while reading remotes or config
    """

    exit_code = 5


class NoProfileMatchError(GitSetupError):
    """No profile cleared the detection confidence floor."""

    exit_code = 6


class ProfileNotFoundError(GitSetupError):
    """A profile looked up by name does not exist."""

    exit_code = 7
