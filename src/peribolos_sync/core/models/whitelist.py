"""Whitelist of repositories included regardless of scan results."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from peribolos_sync.core.exceptions import ConfigurationError


class WhitelistConfig(BaseModel):
    """Mapping of organization to repositories, read from ``whitelist:``."""

    whitelist: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path) -> "WhitelistConfig":
        path = Path(path)
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(
                [f"failed to read whitelist file {path}: {e}"],
                details={"path": str(path)},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                [f"failed to parse whitelist file {path}: {e}"],
                details={"path": str(path)},
            ) from e

        try:
            return cls.model_validate(raw or {})
        except ValidationError as e:
            raise ConfigurationError(
                [f"invalid whitelist file {path}: {e}"],
                details={"path": str(path)},
            ) from e
