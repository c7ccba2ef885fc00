"""Scanner for a directory tree of ci-operator configuration files."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from peribolos_sync.core.cancellation import CancellationToken, check_cancelled
from peribolos_sync.core.exceptions import ConfigScanError
from peribolos_sync.core.models.ci_operator import ConfigInfo, ReleaseBuildConfiguration

logger = structlog.get_logger(__name__)

# Location of the ci-operator configuration inside an openshift/release checkout.
CIOP_CONFIG_IN_REPO_PATH = Path("ci-operator") / "config"

ConfigCallback = Callable[[ReleaseBuildConfiguration, ConfigInfo], None]


def info_from_path(path: Path) -> ConfigInfo:
    """Derive org, repo, branch and variant from a configuration file path.

    Expects ``.../<org>/<repo>/<org>-<repo>-<branch>[__<variant>].yaml``.
    """
    repo = path.parent.name
    org = path.parent.parent.name
    if not org or not repo:
        raise ValueError(f"path {path} is not in <org>/<repo>/<file> layout")

    prefix = f"{org}-{repo}-"
    stem = path.stem
    if not stem.startswith(prefix):
        raise ValueError(f"file name {path.name} does not start with {prefix!r}")

    rest = stem[len(prefix):]
    branch, sep, variant = rest.rpartition("__")
    if not sep:
        branch, variant = rest, ""
    return ConfigInfo(org=org, repo=repo, branch=branch, variant=variant, filename=str(path))


class CIOperatorConfigScanner:
    """Walks a ci-operator configuration directory.

    Every ``.yaml`` file below the root is parsed; any other file is skipped.
    The first file that cannot be read or parsed aborts the walk.
    """

    def __init__(self, root: str | Path, cancellation: CancellationToken | None = None) -> None:
        self._root = Path(root)
        self._cancellation = cancellation

    def _config_files(self) -> list[Path]:
        if not self._root.is_dir():
            raise ConfigScanError(
                f"ci-operator configuration directory does not exist: {self._root}",
                details={"path": str(self._root)},
            )

        def _on_error(error: OSError) -> None:
            raise ConfigScanError(
                f"failed to walk ci-operator configuration directory {error.filename}: {error}",
                details={"path": str(error.filename)},
            ) from error

        files = []
        for dirpath, _, filenames in os.walk(self._root, onerror=_on_error):
            for filename in filenames:
                path = Path(dirpath) / filename
                if path.suffix == ".yaml" and path.is_file():
                    files.append(path)
        return sorted(files)

    def load(self, path: Path) -> tuple[ReleaseBuildConfiguration, ConfigInfo]:
        """Parse a single configuration file and its location metadata."""
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigScanError(
                f"failed to load ci-operator config {path}: {e}",
                details={"path": str(path)},
            ) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigScanError(
                f"ci-operator config {path} is not a mapping",
                details={"path": str(path)},
            )

        try:
            if len(path.relative_to(self._root).parts) != 3:
                raise ValueError(f"path {path} is not in <org>/<repo>/<file> layout")
            config = ReleaseBuildConfiguration.model_validate(raw)
            info = info_from_path(path)
        except (ValidationError, ValueError) as e:
            raise ConfigScanError(
                f"invalid ci-operator config {path}: {e}",
                details={"path": str(path)},
            ) from e
        return config, info

    def iter_configs(self) -> Iterator[tuple[ReleaseBuildConfiguration, ConfigInfo]]:
        for path in self._config_files():
            check_cancelled(self._cancellation, f"reading {path}")
            yield self.load(path)

    def operate(self, callback: ConfigCallback) -> int:
        """Call ``callback`` for every configuration; return how many were visited."""
        count = 0
        for config, info in self.iter_configs():
            callback(config, info)
            count += 1
        logger.debug("Scanned ci-operator configs", root=str(self._root), files=count)
        return count
