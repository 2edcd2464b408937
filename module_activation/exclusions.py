"""Exclusion merging and validation."""

import importlib
import logging
import types
from collections.abc import Callable
from collections.abc import Iterable

from .conditions.on_module import is_module_available
from .errors import InvalidExclusionError

logger = logging.getLogger(__name__)


def type_to_id(value: object) -> str:
    """Convert a class, module or string to a module id.

    Classes map to ``module.QualName``, modules to their ``__name__``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, types.ModuleType):
        return value.__name__
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    raise TypeError(f"Cannot derive a module id from {value!r}")


def is_resolvable(module_id: str) -> bool:
    """Check whether an id refers to something that actually exists.

    True for importable modules, and for attributes of importable modules
    (``pkg.mod.ClassName``). Resolving an attribute imports its module.
    """
    try:
        if is_module_available(module_id):
            return True
    except Exception as e:
        logger.debug(f"Exclusion '{module_id}' is not resolvable: {e}")
        return False
    if "." not in module_id:
        return False
    module_name, _, attribute = module_id.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        logger.debug(f"Exclusion '{module_id}' is not resolvable: {e}")
        return False
    return hasattr(module, attribute)


class ExclusionResolver:
    """Merges exclusions from all sources and validates them against candidates."""

    def __init__(self, resolvable: Callable[[str], bool] | None = None):
        """Initialize resolver.

        Args:
            resolvable: Predicate telling whether an excluded id exists at all.
                Defaults to is_resolvable.
        """
        self._resolvable = resolvable or is_resolvable

    def resolve(
        self,
        explicit_names: Iterable[str] = (),
        explicit_types: Iterable[object] = (),
        environment_list: Iterable[str] = (),
    ) -> list[str]:
        """Merge the exclusion sources.

        Args:
            explicit_names: Ids excluded by name
            explicit_types: Classes, modules or ids excluded by type
            environment_list: Ids from the environment exclusion property

        Returns:
            Deduplicated exclusions in insertion order (names, then types, then environment)
        """
        merged: dict[str, None] = {}
        for name in explicit_names:
            merged.setdefault(name, None)
        for value in explicit_types:
            merged.setdefault(type_to_id(value), None)
        for name in environment_list:
            merged.setdefault(name.strip(), None)
        return list(merged)

    def validate(self, candidates: list[str], exclusions: Iterable[str]) -> None:
        """Reject exclusions of real modules that were never candidates.

        Exclusions that cannot be resolved at all are ignored; they refer to
        dependencies absent from this installation.

        Raises:
            InvalidExclusionError: Naming every offending id
        """
        known = set(candidates)
        invalid = [
            exclusion for exclusion in exclusions if exclusion not in known and self._resolvable(exclusion)
        ]
        if invalid:
            raise InvalidExclusionError(invalid)

    @staticmethod
    def subtract(candidates: list[str], exclusions: Iterable[str]) -> list[str]:
        """Remove excluded ids, preserving candidate order."""
        excluded = set(exclusions)
        return [candidate for candidate in candidates if candidate not in excluded]

