"""Peribolos configuration document handling."""

from peribolos_sync.peribolos.document import (
    dump_peribolos_config,
    load_peribolos_config,
    merge_org_repos,
    write_peribolos_config,
)

__all__ = [
    "dump_peribolos_config",
    "load_peribolos_config",
    "merge_org_repos",
    "write_peribolos_config",
]
