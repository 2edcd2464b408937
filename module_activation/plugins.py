"""Plugin loading for condition filters and activation listeners.

Plugins are referenced as ``package.module:ClassName`` and instantiated
without arguments. The order of the references is the evaluation order.
"""

import importlib
import importlib.metadata
import logging
from typing import Any

from .errors import PluginLoadError

logger = logging.getLogger(__name__)

FILTER_GROUP = "module_activation.filters"
LISTENER_GROUP = "module_activation.listeners"


def load_plugin(ref: str) -> Any:
    """Import and instantiate a single plugin.

    Args:
        ref: ``package.module:ClassName`` reference

    Returns:
        Plugin instance

    Raises:
        PluginLoadError: If the reference is malformed or cannot be imported
    """
    module_name, sep, attribute = ref.partition(":")
    if not sep or not module_name or not attribute:
        raise PluginLoadError(f"Invalid plugin reference '{ref}', expected 'package.module:ClassName'")

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise PluginLoadError(f"Cannot load plugin '{ref}': {e}") from e

    logger.debug(f"[plugin] loaded {ref}")
    return factory()


def load_plugins(refs: list[str]) -> list[Any]:
    """Instantiate plugins in reference order."""
    return [load_plugin(ref) for ref in refs]


def discover_plugins(group: str) -> list[Any]:
    """Instantiate every plugin advertised under an entry point group.

    Args:
        group: Entry point group name

    Returns:
        Plugin instances in discovery order
    """
    plugins = []
    for ep in importlib.metadata.entry_points(group=group):
        try:
            factory = ep.load()
        except (ImportError, AttributeError) as e:
            raise PluginLoadError(f"Cannot load plugin entry point '{ep.name}' ({ep.value}): {e}") from e
        plugins.append(factory())
        logger.debug(f"[plugin] {group}: {ep.name} -> {ep.value}")
    return plugins
