"""Reading, updating and atomically rewriting a peribolos configuration."""

import os
import tempfile
from pathlib import Path
from typing import Any

import structlog
import yaml

from peribolos_sync.core.cancellation import CancellationToken, check_cancelled
from peribolos_sync.core.exceptions import PeribolosConfigError
from peribolos_sync.core.models.peribolos import RepoSettings

logger = structlog.get_logger(__name__)


def load_peribolos_config(path: str | Path) -> dict[str, Any]:
    """Load the whole peribolos document as plain mappings.

    Keys this tool does not model are kept as-is so that they survive the
    rewrite.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PeribolosConfigError(
            f"could not read peribolos configuration file {path}: {e}",
            details={"path": str(path)},
        ) from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PeribolosConfigError(
            f"failed to unmarshal peribolos config {path}: {e}",
            details={"path": str(path)},
        ) from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise PeribolosConfigError(
            f"peribolos config {path} is not a mapping",
            details={"path": str(path)},
        )
    return document


def merge_org_repos(
    document: dict[str, Any], dest_org: str, repos: dict[str, RepoSettings]
) -> dict[str, Any]:
    """Replace the repositories of ``dest_org`` with ``repos``.

    The replacement is wholesale: repositories missing from ``repos`` are
    dropped. Every other organization is left untouched.
    """
    orgs = document.get("orgs")
    if orgs is None:
        orgs = {}
    elif not isinstance(orgs, dict):
        raise PeribolosConfigError(
            "peribolos config 'orgs' is not a mapping", details={"org": dest_org}
        )

    org_config = orgs.get(dest_org)
    if org_config is None:
        org_config = {}
    elif not isinstance(org_config, dict):
        raise PeribolosConfigError(
            f"peribolos config for org {dest_org} is not a mapping",
            details={"org": dest_org},
        )

    org_config = dict(org_config)
    serialized = {name: settings.to_document() for name, settings in repos.items()}
    if serialized:
        org_config["repos"] = serialized
    else:
        org_config.pop("repos", None)

    orgs = dict(orgs)
    orgs[dest_org] = org_config
    document["orgs"] = orgs
    return document


def dump_peribolos_config(document: dict[str, Any]) -> str:
    try:
        return yaml.safe_dump(
            document,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        )
    except (yaml.YAMLError, TypeError) as e:
        raise PeribolosConfigError(f"failed to marshal peribolos config: {e}") from e


def write_peribolos_config(
    path: str | Path,
    document: dict[str, Any],
    cancellation: CancellationToken | None = None,
) -> None:
    """Serialize ``document`` and atomically replace ``path`` with it.

    The new content goes to a temporary file in the same directory which is
    renamed over ``path``; on any failure the original file is unchanged.
    """
    path = Path(path)
    out = dump_peribolos_config(document)
    check_cancelled(cancellation, f"writing {path}")

    try:
        mode = path.stat().st_mode & 0o777
    except FileNotFoundError:
        mode = 0o644

    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise PeribolosConfigError(
            f"failed to write output {path}: {e}", details={"path": str(path)}
        ) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(out)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise PeribolosConfigError(
            f"failed to write output {path}: {e}", details={"path": str(path)}
        ) from e

    logger.info("Wrote peribolos configuration", path=str(path), bytes=len(out))
