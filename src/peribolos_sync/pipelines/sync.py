"""Sync pipeline: scan configs, fetch repository metadata, rewrite peribolos."""

from pathlib import Path
from typing import Protocol

import structlog

from peribolos_sync.ciop.promotion import builds_official_images
from peribolos_sync.ciop.scanner import CIOP_CONFIG_IN_REPO_PATH, CIOperatorConfigScanner
from peribolos_sync.core.cancellation import CancellationToken, check_cancelled
from peribolos_sync.core.exceptions import ConfigScanError
from peribolos_sync.core.models.ci_operator import ConfigInfo, ReleaseBuildConfiguration
from peribolos_sync.core.models.github import FullRepo
from peribolos_sync.core.models.peribolos import RepoSettings, prune_repo_defaults
from peribolos_sync.peribolos.document import (
    load_peribolos_config,
    merge_org_repos,
    write_peribolos_config,
)

logger = structlog.get_logger(__name__)

OrgRepos = dict[str, set[str]]


class RepoGetter(Protocol):
    def get_repo(self, owner: str, name: str) -> FullRepo: ...


def get_repos_for_private_org(
    release_repo_path: str | Path,
    whitelist: dict[str, list[str]],
    cancellation: CancellationToken | None = None,
) -> OrgRepos:
    """Collect org/repo pairs that promote official images.

    Whitelisted pairs are always included. The ci-operator configuration
    directory of the release repository is scanned for the rest.
    """
    ret: OrgRepos = {}
    for org, repos in whitelist.items():
        ret.setdefault(org, set()).update(repos)

    def _collect(config: ReleaseBuildConfiguration, info: ConfigInfo) -> None:
        if not builds_official_images(config):
            return
        ret.setdefault(info.org, set()).add(info.repo)

    scanner = CIOperatorConfigScanner(
        Path(release_repo_path) / CIOP_CONFIG_IN_REPO_PATH, cancellation=cancellation
    )
    try:
        scanner.operate(_collect)
    except ConfigScanError as e:
        raise ConfigScanError(
            f"error while operating in ci-operator configuration files: {e.message}",
            details=e.details,
        ) from e
    return ret


def generate_repositories(
    client: RepoGetter,
    org_repos: OrgRepos,
    cancellation: CancellationToken | None = None,
) -> dict[str, RepoSettings]:
    """Fetch and prune the settings of every repository in ``org_repos``.

    Results are keyed by the name GitHub returns, which may differ from the
    name that was asked for. Any failed lookup aborts the whole run.
    """
    peribolos_repos: dict[str, RepoSettings] = {}
    for org in sorted(org_repos):
        for repo in sorted(org_repos[org]):
            check_cancelled(cancellation, f"fetching {org}/{repo}")
            logger.info("Processing repository details...", org=org, repo=repo)

            full_repo = client.get_repo(org, repo)
            peribolos_repos[full_repo.name] = prune_repo_defaults(
                RepoSettings.from_full_repo(full_repo)
            )
    return peribolos_repos


class SyncPipeline:
    """Runs one sync of a destination organization.

    The peribolos document is read once at the start and written once at
    the end; nothing is written if an earlier step fails.
    """

    def __init__(
        self,
        client: RepoGetter,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._client = client
        self._cancellation = cancellation

    def run(
        self,
        peribolos_config: str | Path,
        release_repo_path: str | Path,
        dest_org: str,
        whitelist: dict[str, list[str]] | None = None,
    ) -> dict[str, RepoSettings]:
        check_cancelled(self._cancellation, f"reading {peribolos_config}")
        document = load_peribolos_config(peribolos_config)

        org_repos = get_repos_for_private_org(
            release_repo_path, whitelist or {}, cancellation=self._cancellation
        )
        logger.info(
            "Collected repositories",
            orgs=len(org_repos),
            repos=sum(len(repos) for repos in org_repos.values()),
        )

        repos = generate_repositories(self._client, org_repos, cancellation=self._cancellation)
        merge_org_repos(document, dest_org, repos)
        write_peribolos_config(peribolos_config, document, cancellation=self._cancellation)
        return repos
