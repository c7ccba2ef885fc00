"""ci-operator configuration models.

Only the parts of a ci-operator configuration needed to decide whether a
repository promotes official images are modelled; everything else in the
file is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class PromotionConfiguration(BaseModel):
    """Where built images are promoted to."""

    model_config = ConfigDict(extra="ignore")

    namespace: str = ""
    name: str = ""
    tag: str = ""
    disabled: bool = False


class ReleaseTagConfiguration(BaseModel):
    """The release image stream the build is tested against."""

    model_config = ConfigDict(extra="ignore")

    namespace: str = ""
    name: str = ""


class ReleaseBuildConfiguration(BaseModel):
    """A single ci-operator build configuration file."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    promotion: PromotionConfiguration | None = None
    release_tag_configuration: ReleaseTagConfiguration | None = Field(
        default=None, alias="tag_specification"
    )


class ConfigInfo(BaseModel):
    """Location metadata for a configuration file.

    Derived from ``<org>/<repo>/<org>-<repo>-<branch>[__<variant>].yaml``.
    """

    org: str
    repo: str
    branch: str
    variant: str = ""
    filename: str
