"""Pytest configuration and fixtures."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog
import yaml

from peribolos_sync.core.exceptions import GitHubError
from peribolos_sync.core.models.github import FullRepo

ConfigWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging so no test writes to a stream another test closed."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def release_repo(tmp_path: Path) -> Path:
    """An empty openshift/release checkout with a ci-operator config directory."""
    repo_path = tmp_path / "release"
    (repo_path / "ci-operator" / "config").mkdir(parents=True)
    return repo_path


@pytest.fixture
def write_ciop_config(release_repo: Path) -> ConfigWriter:
    """Write a ci-operator config for org/repo/branch into the release repo."""

    def _write(
        org: str,
        repo: str,
        branch: str = "master",
        variant: str = "",
        promotion: dict | None = None,
        tag_specification: dict | None = None,
        raw: str | None = None,
    ) -> Path:
        directory = release_repo / "ci-operator" / "config" / org / repo
        directory.mkdir(parents=True, exist_ok=True)
        suffix = f"__{variant}" if variant else ""
        path = directory / f"{org}-{repo}-{branch}{suffix}.yaml"

        if raw is not None:
            path.write_text(raw)
            return path

        config: dict = {
            "build_root": {"image_stream_tag": {"namespace": "openshift", "name": "release", "tag": "golang-1.13"}},
            "resources": {"*": {"requests": {"cpu": "100m"}}},
            "tests": [{"as": "unit", "commands": "make test", "container": {"from": "src"}}],
            "zz_generated_metadata": {"org": org, "repo": repo, "branch": branch, "variant": variant},
        }
        if promotion is not None:
            config["promotion"] = promotion
        if tag_specification is not None:
            config["tag_specification"] = tag_specification
        path.write_text(yaml.safe_dump(config))
        return path

    return _write


@pytest.fixture
def peribolos_file(tmp_path: Path) -> Path:
    """A peribolos config with two organizations."""
    path = tmp_path / "org.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "orgs": {
                    "openshift": {
                        "name": "OpenShift",
                        "admins": ["admin-a", "admin-b"],
                        "repos": {"origin": {"description": "The origin", "has_wiki": False}},
                    },
                    "openshift-priv": {
                        "name": "OpenShift Private",
                        "members": ["bot"],
                        "repos": {"stale": {"private": True}},
                    },
                }
            }
        )
    )
    return path


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient.get_repo."""

    def __init__(self, repos: dict[tuple[str, str], FullRepo], fail: set[tuple[str, str]] | None = None) -> None:
        self.repos = repos
        self.fail = fail or set()
        self.calls: list[tuple[str, str]] = []

    def get_repo(self, owner: str, name: str) -> FullRepo:
        self.calls.append((owner, name))
        if (owner, name) in self.fail or (owner, name) not in self.repos:
            raise GitHubError(f"not found: {owner}/{name}", details={"org": owner, "repo": name})
        return self.repos[(owner, name)]


@pytest.fixture
def fake_github() -> Callable[..., FakeGitHubClient]:
    return FakeGitHubClient
