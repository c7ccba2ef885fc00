"""GitHub API response models."""

from pydantic import BaseModel, ConfigDict, field_validator


class FullRepo(BaseModel):
    """Repository attributes returned by ``GET /repos/{owner}/{repo}``.

    ``null`` strings decode to ``""``; absent or ``null`` flags to ``False``.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    description: str = ""
    homepage: str = ""
    private: bool = False
    has_issues: bool = False
    has_projects: bool = False
    has_wiki: bool = False
    allow_merge_commit: bool = False
    allow_squash_merge: bool = False
    allow_rebase_merge: bool = False
    archived: bool = False
    default_branch: str = ""

    @field_validator("description", "homepage", "default_branch", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator(
        "private",
        "has_issues",
        "has_projects",
        "has_wiki",
        "allow_merge_commit",
        "allow_squash_merge",
        "allow_rebase_merge",
        "archived",
        mode="before",
    )
    @classmethod
    def _null_to_false(cls, value: object) -> object:
        return False if value is None else value
