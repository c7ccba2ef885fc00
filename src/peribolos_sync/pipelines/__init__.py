"""Pipelines for peribolos-sync."""

from peribolos_sync.pipelines.sync import (
    SyncPipeline,
    generate_repositories,
    get_repos_for_private_org,
)

__all__ = ["SyncPipeline", "generate_repositories", "get_repos_for_private_org"]
