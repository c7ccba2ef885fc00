"""Peribolos repository settings and default pruning."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from peribolos_sync.core.models.github import FullRepo

# Values peribolos assumes when a setting is omitted. A setting equal to its
# default is dropped from the output to keep the document minimal.
REPO_DEFAULTS: dict[str, Any] = {
    "description": "",
    "homepage": "",
    "private": False,
    "has_issues": True,
    "has_projects": True,
    "has_wiki": True,
    "allow_merge_commit": True,
    "allow_squash_merge": True,
    "allow_rebase_merge": True,
    "archived": False,
    "default_branch": "master",
}


class RepoSettings(BaseModel):
    """Settings of one repository in a peribolos organization."""

    model_config = ConfigDict(extra="forbid")

    description: str | None = None
    homepage: str | None = None
    private: bool | None = None
    has_issues: bool | None = None
    has_projects: bool | None = None
    has_wiki: bool | None = None
    allow_merge_commit: bool | None = None
    allow_squash_merge: bool | None = None
    allow_rebase_merge: bool | None = None
    archived: bool | None = None
    default_branch: str | None = None

    @classmethod
    def from_full_repo(cls, repo: FullRepo) -> "RepoSettings":
        """Copy every setting from an API response, unpruned."""
        return cls(**{field: getattr(repo, field) for field in cls.model_fields})

    def to_document(self) -> dict[str, Any]:
        """Serialize to the mapping written under ``repos.<name>``."""
        return self.model_dump(exclude_none=True)


def prune_repo_defaults(
    repo: RepoSettings, defaults: dict[str, Any] | None = None
) -> RepoSettings:
    """Return a copy of ``repo`` with every default-valued setting unset.

    Settings that are already unset stay unset, so pruning twice gives the
    same result as pruning once.
    """
    if defaults is None:
        defaults = REPO_DEFAULTS
    updates = {
        field: None
        for field, default in defaults.items()
        if getattr(repo, field) is not None and getattr(repo, field) == default
    }
    return repo.model_copy(update=updates)
