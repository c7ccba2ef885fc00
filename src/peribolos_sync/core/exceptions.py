"""Exception hierarchy for peribolos-sync."""

from typing import Any


class SyncError(Exception):
    """Base exception for all sync failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SyncError):
    """Raised when command-line or settings validation fails.

    All problems found are collected in ``errors`` so they can be
    reported together.
    """

    def __init__(self, errors: list[str], details: dict[str, Any] | None = None) -> None:
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = self.errors[0]
        else:
            message = "[" + ", ".join(self.errors) + "]"
        super().__init__(message, details)


class ConfigScanError(SyncError):
    """Raised when the ci-operator configuration tree cannot be walked or parsed."""


class GitHubError(SyncError):
    """Raised when a repository lookup against the GitHub API fails."""


class PeribolosConfigError(SyncError):
    """Raised when the peribolos document cannot be read, parsed or written."""


class OperationCancelled(SyncError):
    """Raised when the run was asked to stop before finishing."""
