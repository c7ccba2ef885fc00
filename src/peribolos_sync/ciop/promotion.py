"""Promotion rules for ci-operator configurations."""

from peribolos_sync.core.models.ci_operator import ReleaseBuildConfiguration

OFFICIAL_NAMESPACE = "ocp"


def extract_promotion_namespace(config: ReleaseBuildConfiguration) -> str:
    """Return the namespace images are promoted to.

    Falls back to the release tag namespace when promotion does not name one.
    """
    if config.promotion is not None and config.promotion.namespace:
        return config.promotion.namespace
    if config.release_tag_configuration is not None and config.release_tag_configuration.namespace:
        return config.release_tag_configuration.namespace
    return ""


def builds_official_images(config: ReleaseBuildConfiguration) -> bool:
    """Whether the configuration promotes images into the official namespace."""
    if config.promotion is not None and config.promotion.disabled:
        return False
    return extract_promotion_namespace(config) == OFFICIAL_NAMESPACE
