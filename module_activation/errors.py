"""Exception hierarchy for module activation.

Every fatal condition raised while resolving the activated module set derives
from ActivationError so hosts can abort startup with a single except clause.
"""

from pathlib import Path
from typing import Any


class ActivationError(Exception):
    """Base class for all activation failures."""


class InvalidExclusionError(ActivationError):
    """Raised when resolvable modules are excluded but were never candidates.

    All offending ids are reported together.
    """

    def __init__(self, invalid_exclusions: list[str]):
        self.invalid_exclusions = list(invalid_exclusions)
        lines = "".join(f"\t- {module_id}\n" for module_id in self.invalid_exclusions)
        super().__init__(
            f"The following modules could not be excluded because they are not activation candidates:\n{lines}"
        )


class CyclicOrderingError(ActivationError):
    """Raised when before/after constraints cannot be satisfied."""

    def __init__(self, unresolved: list[str]):
        self.unresolved = sorted(unresolved)
        super().__init__(f"Ordering cycle detected between modules: {', '.join(self.unresolved)}")


class ConditionFilterError(ActivationError):
    """Raised when a condition filter fails or returns a malformed result."""

    def __init__(self, filter_name: str, message: str):
        self.filter_name = filter_name
        super().__init__(f"Condition filter '{filter_name}' failed: {message}")


class MetadataError(ActivationError):
    """Raised when a required metadata source cannot be loaded."""

    def __init__(self, source: Path, message: str):
        self.source = source
        super().__init__(f"Failed to load module metadata from {source}: {message}")


class RegistryError(ActivationError):
    """Raised when no activation candidates can be found."""


class PropertyConversionError(ActivationError):
    """Raised when an environment property cannot be converted to the requested type."""

    def __init__(self, key: str, value: Any, target: type):
        self.key = key
        self.value = value
        super().__init__(f"Cannot convert property '{key}' value {value!r} to {target.__name__}")


class PluginLoadError(ActivationError):
    """Raised when a filter or listener plugin reference cannot be loaded."""
