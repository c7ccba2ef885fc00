"""ci-operator configuration handling for peribolos-sync."""

from peribolos_sync.ciop.promotion import builds_official_images
from peribolos_sync.ciop.scanner import (
    CIOP_CONFIG_IN_REPO_PATH,
    CIOperatorConfigScanner,
    info_from_path,
)

__all__ = [
    "CIOP_CONFIG_IN_REPO_PATH",
    "CIOperatorConfigScanner",
    "builds_official_images",
    "info_from_path",
]
