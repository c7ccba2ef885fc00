"""Command-line entry point for private-org-peribolos-sync."""

import sys
from urllib.parse import urlparse

import click
import structlog
from pydantic import BaseModel, Field

from peribolos_sync.config.logging import configure_logging
from peribolos_sync.config.settings import get_settings
from peribolos_sync.core.cancellation import CancellationToken
from peribolos_sync.core.exceptions import ConfigurationError, SyncError
from peribolos_sync.core.models.whitelist import WhitelistConfig
from peribolos_sync.github.client import GitHubClient, load_token
from peribolos_sync.pipelines.sync import SyncPipeline

logger = structlog.get_logger(__name__)


class Options(BaseModel):
    """Resolved command-line options."""

    peribolos_config: str | None = None
    release_repo_path: str | None = None
    destination_org: str | None = None
    whitelist_file: str | None = None
    github_endpoint: str = ""
    github_token_path: str = ""
    whitelist: WhitelistConfig = Field(default_factory=WhitelistConfig)


def validate_options(options: Options) -> Options:
    """Check every option and report all problems at once.

    Loads the whitelist file as part of validation.
    """
    errors: list[str] = []

    if not options.release_repo_path:
        errors.append("--release-repo-path is not specified")
    if not options.peribolos_config:
        errors.append("--peribolos-config is not specified")
    if not options.destination_org:
        errors.append("--destination-org is not specified")

    parsed = urlparse(options.github_endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        errors.append(f"invalid --github-endpoint URL {options.github_endpoint!r}")

    if options.whitelist_file:
        try:
            options.whitelist = WhitelistConfig.from_file(options.whitelist_file)
        except ConfigurationError as e:
            errors.extend(e.errors)

    if errors:
        raise ConfigurationError(errors)
    return options


@click.command()
@click.option("--peribolos-config", help="Peribolos configuration file")
@click.option("--release-repo-path", help="Path to a openshift/release repository directory")
@click.option(
    "--destination-org",
    help="Destination name of the peribolos configuration organization",
)
@click.option("--whitelist-file", help="YAML file with org/repos to always include")
@click.option("--github-endpoint", help="GitHub API endpoint (default from settings)")
@click.option("--github-token-path", help="Path to the file containing the GitHub OAuth token")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    peribolos_config: str | None,
    release_repo_path: str | None,
    destination_org: str | None,
    whitelist_file: str | None,
    github_endpoint: str | None,
    github_token_path: str | None,
    verbose: bool,
) -> None:
    """Sync repositories that promote official images into a peribolos org."""
    settings = get_settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_logs=settings.json_logs,
    )

    options = Options(
        peribolos_config=peribolos_config,
        release_repo_path=release_repo_path,
        destination_org=destination_org,
        whitelist_file=whitelist_file,
        github_endpoint=github_endpoint if github_endpoint is not None else settings.github_endpoint,
        github_token_path=(
            github_token_path if github_token_path is not None else settings.github_token_path
        ),
    )
    try:
        validate_options(options)
    except ConfigurationError as e:
        logger.error("invalid options", error=e.message)
        sys.exit(1)

    log = logger.bind(destination_org=options.destination_org)
    cancellation = CancellationToken()

    try:
        with cancellation.handle_signals():
            token = load_token(options.github_token_path)
            with GitHubClient(
                endpoint=options.github_endpoint,
                token=token,
                timeout=settings.http_timeout,
            ) as client:
                repos = SyncPipeline(client, cancellation=cancellation).run(
                    peribolos_config=options.peribolos_config,
                    release_repo_path=options.release_repo_path,
                    dest_org=options.destination_org,
                    whitelist=options.whitelist.whitelist,
                )
    except SyncError as e:
        log.error(e.message, **e.details)
        sys.exit(1)

    log.info("Sync complete", repos=len(repos))


if __name__ == "__main__":
    main()
