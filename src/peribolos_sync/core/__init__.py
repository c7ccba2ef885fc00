"""Core domain models and interfaces for peribolos-sync."""

from peribolos_sync.core.cancellation import CancellationToken
from peribolos_sync.core.exceptions import (
    ConfigScanError,
    ConfigurationError,
    GitHubError,
    OperationCancelled,
    PeribolosConfigError,
    SyncError,
)
from peribolos_sync.core.models import (
    ConfigInfo,
    FullRepo,
    ReleaseBuildConfiguration,
    RepoSettings,
    WhitelistConfig,
)

__all__ = [
    # Models
    "ConfigInfo",
    "FullRepo",
    "ReleaseBuildConfiguration",
    "RepoSettings",
    "WhitelistConfig",
    # Cancellation
    "CancellationToken",
    # Exceptions
    "SyncError",
    "ConfigurationError",
    "ConfigScanError",
    "GitHubError",
    "PeribolosConfigError",
    "OperationCancelled",
]
