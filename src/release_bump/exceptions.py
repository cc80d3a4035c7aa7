"""Exception hierarchy for release-bump.

All errors raised by release-bump derive from ReleaseBumpError so that
the CLI can catch a single type and turn it into a clean exit code.
"""

from __future__ import annotations


class ReleaseBumpError(Exception):
    """Base class for all release-bump errors."""


# Configuration


class ConfigError(ReleaseBumpError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """The [tool.release-bump] section is invalid."""


# Versions


class VersionError(ReleaseBumpError):
    """Version handling failed."""


class InvalidVersionError(VersionError):
    """A version string is not of the form major.minor.patch."""


class MissingBaselineError(VersionError):
    """No release tag exists and no fallback version was supplied."""


# Version control


class GitError(ReleaseBumpError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class NotAGitRepositoryError(GitError):
    """The given path is not inside a git work tree."""


# Project files


class ProjectError(ReleaseBumpError):
    """The project manifest could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """The manifest does not declare a version."""
