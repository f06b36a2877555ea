# template_profiler/analyzer/template_paths.py - Template source path resolution
"""
Builds the template name to source path index for a profile tree.
"""

from typing import Dict, Iterator
import logging

from template_profiler.collector.profile import Profile
from template_profiler.loader import TemplateNotFound


logger = logging.getLogger(__name__)


def iter_profiles(profile: Profile) -> Iterator[Profile]:
    """
    Yield a node and all its descendants in pre-order.

    Args:
        profile: Node to start from
    """
    yield profile
    for child in profile:
        yield from iter_profiles(child)


def resolve_template_paths(profile: Profile, loader) -> Dict[str, str]:
    """
    Resolve the source path of every template span in the tree.

    Lookup failures only drop the affected entry. When a template name
    appears more than once, the last successful resolution in traversal
    order wins.

    Args:
        profile: Root of the profile tree
        loader: Object exposing resolve(name) -> path, or None when no
            template engine is attached

    Returns:
        Dictionary mapping template names to source paths
    """
    template_paths: Dict[str, str] = {}

    if loader is None:
        logger.debug("No template loader attached, skipping path resolution")
        return template_paths

    for node in iter_profiles(profile):
        if not node.is_template():
            continue

        name = node.name
        try:
            path = loader.resolve(name)
        except TemplateNotFound as e:
            logger.debug(f"Could not resolve template {name}: {e}")
            continue

        if path:
            template_paths[name] = str(path)

    logger.debug(f"Resolved {len(template_paths)} template paths")
    return template_paths
