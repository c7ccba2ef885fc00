"""GitHub integration for peribolos-sync."""

from peribolos_sync.github.client import GitHubClient, load_token

__all__ = ["GitHubClient", "load_token"]
