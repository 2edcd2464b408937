"""Environment property lookup for activation decisions.

Properties are resolved from three layers (first match wins):
1. Explicit properties passed by the host (e.g. CLI ``--property`` values)
2. Process environment (``activation.exclude`` -> ``ACTIVATION_EXCLUDE``)
3. Merged settings (nested YAML flattened to dotted keys)
"""

import hashlib
import json
import logging
import os
from collections.abc import Mapping
from typing import Any

from .errors import PropertyConversionError

logger = logging.getLogger(__name__)

ENABLED_PROPERTY = "activation.enabled"
EXCLUDE_PROPERTY = "activation.exclude"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def flatten_settings(settings: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested settings into dotted keys.

    Lists and scalars are kept as values; only mappings are descended into.

    Example:
        >>> flatten_settings({"activation": {"exclude": ["a"]}})
        {'activation.exclude': ['a']}
    """
    flat: dict[str, Any] = {}
    for key, value in settings.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_settings(value, dotted))
        else:
            flat[dotted] = value
    return flat


def to_env_var(key: str) -> str:
    """Map a dotted property key to its environment variable name."""
    return key.upper().replace(".", "_").replace("-", "_")


class Environment:
    """Layered key -> value property source."""

    def __init__(
        self,
        properties: Mapping[str, Any] | None = None,
        settings: Mapping[str, Any] | None = None,
        use_os_environ: bool = True,
    ):
        """Initialize environment.

        Args:
            properties: Explicit overrides (highest precedence)
            settings: Nested settings dictionary (lowest precedence)
            use_os_environ: Whether to consult the process environment
        """
        self._properties = dict(properties or {})
        self._settings = flatten_settings(settings or {})
        self._use_os_environ = use_os_environ

    def _lookup(self, key: str) -> Any:
        if key in self._properties:
            return self._properties[key]
        if self._use_os_environ:
            env_value = os.environ.get(to_env_var(key))
            if env_value is not None:
                return env_value
        return self._settings.get(key)

    def contains_property(self, key: str) -> bool:
        """Check whether any layer defines the key."""
        return self._lookup(key) is not None

    def get_property(self, key: str, type: type = str, default: Any = None) -> Any:
        """Resolve a property and convert it to the requested type.

        Args:
            key: Dotted property key
            type: One of str, bool, int or list
            default: Returned when the property is absent

        Returns:
            Converted value or default

        Raises:
            PropertyConversionError: If the value cannot be converted
        """
        raw = self._lookup(key)
        if raw is None:
            return default
        return self._convert(key, raw, type)

    @staticmethod
    def _convert(key: str, raw: Any, target: type) -> Any:
        if target is bool:
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if text in _TRUE_VALUES:
                return True
            if text in _FALSE_VALUES:
                return False
            raise PropertyConversionError(key, raw, target)

        if target is int:
            if isinstance(raw, bool):
                raise PropertyConversionError(key, raw, target)
            try:
                return int(raw)
            except (TypeError, ValueError) as e:
                raise PropertyConversionError(key, raw, target) from e

        if target is list:
            items = raw if isinstance(raw, list | tuple) else str(raw).split(",")
            return [str(item).strip() for item in items if str(item).strip()]

        if isinstance(raw, list | tuple):
            return ",".join(str(item) for item in raw)
        return str(raw)

    def is_activation_enabled(self) -> bool:
        """Check the global activation switch (defaults to enabled)."""
        return self.get_property(ENABLED_PROPERTY, bool, True)

    def get_excluded_modules(self) -> list[str]:
        """Get the environment-configured exclusion list."""
        return self.get_property(EXCLUDE_PROPERTY, list, [])

    @property
    def identity(self) -> str:
        """Stable fingerprint of every property source.

        Two environments with equal identity resolve every key identically,
        which is what per-context caches key on.
        """
        payload: dict[str, Any] = {
            "properties": self._properties,
            "settings": self._settings,
        }
        if self._use_os_environ:
            payload["os"] = dict(os.environ)
        encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()

    def __repr__(self) -> str:
        return f"Environment(properties={len(self._properties)}, settings={len(self._settings)})"
