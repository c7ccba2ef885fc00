"""Minimal GitHub REST client for repository lookups."""

from pathlib import Path

import httpx
import structlog
from pydantic import ValidationError

from peribolos_sync import __version__
from peribolos_sync.core.exceptions import ConfigurationError, GitHubError
from peribolos_sync.core.models.github import FullRepo

logger = structlog.get_logger(__name__)


def load_token(token_path: str | Path | None) -> str | None:
    """Read an OAuth token from a file, or ``None`` for anonymous access."""
    if not token_path:
        logger.warning("No GitHub token path configured, using anonymous client")
        return None
    path = Path(token_path)
    try:
        token = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigurationError(
            [f"failed to read GitHub token from {path}: {e}"],
            details={"path": str(path)},
        ) from e
    if not token:
        raise ConfigurationError(
            [f"GitHub token file {path} is empty"], details={"path": str(path)}
        )
    return token


class GitHubClient:
    """Read-only client for ``GET /repos/{owner}/{repo}``.

    Requests are made one at a time; there is no retry.
    """

    def __init__(
        self,
        endpoint: str = "https://api.github.com",
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"private-org-peribolos-sync/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=endpoint.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def get_repo(self, owner: str, name: str) -> FullRepo:
        """Fetch full repository metadata."""
        details = {"org": owner, "repo": name}
        try:
            response = self._client.get(f"/repos/{owner}/{name}")
            response.raise_for_status()
            return FullRepo.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise GitHubError(
                f"GitHub returned {e.response.status_code} for {owner}/{name}",
                details={**details, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise GitHubError(
                f"Request for {owner}/{name} failed: {e}", details=details
            ) from e
        except (ValueError, ValidationError) as e:
            raise GitHubError(
                f"Unexpected response for {owner}/{name}: {e}", details=details
            ) from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
