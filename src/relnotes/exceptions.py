"""Exception hierarchy for relnotes.

Fatal errors (bad usage, missing tags, git failures, bad configuration)
propagate to the CLI, which reports them and exits with status 1.
Lookup errors are raised by the GitHub client and absorbed by the
attribution layer, which degrades to a local fallback.
"""

from __future__ import annotations


class RelnotesError(Exception):
    """Base class for all relnotes errors."""


class UsageError(RelnotesError):
    """The command line was invoked with the wrong arguments."""


class NoTagsFoundError(RelnotesError):
    """The repository has no tags to build release notes from."""

    def __init__(self, message: str = "No tags found in repository") -> None:
        super().__init__(message)


class GitError(RelnotesError):
    """A git command failed or git is not available."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class ConfigError(RelnotesError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """A configuration file could not be located or read."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


class LookupFailure(RelnotesError):
    """A GitHub user lookup failed (network error, timeout, non-2xx status)."""


class MalformedResponseError(LookupFailure):
    """The GitHub API answered with a body that could not be interpreted."""
