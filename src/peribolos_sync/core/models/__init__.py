"""Domain models for peribolos-sync."""

from peribolos_sync.core.models.ci_operator import (
    ConfigInfo,
    PromotionConfiguration,
    ReleaseBuildConfiguration,
    ReleaseTagConfiguration,
)
from peribolos_sync.core.models.github import FullRepo
from peribolos_sync.core.models.peribolos import REPO_DEFAULTS, RepoSettings, prune_repo_defaults
from peribolos_sync.core.models.whitelist import WhitelistConfig

__all__ = [
    "ConfigInfo",
    "PromotionConfiguration",
    "ReleaseBuildConfiguration",
    "ReleaseTagConfiguration",
    "FullRepo",
    "RepoSettings",
    "REPO_DEFAULTS",
    "prune_repo_defaults",
    "WhitelistConfig",
]
