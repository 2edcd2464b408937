"""Precomputed module metadata.

Metadata describes ordering hints and activation conditions for candidate
modules without importing them. It is read from a YAML index:

```yaml
modules:
  acme.web.WebModule:
    priority: -10
    after: [acme.core.CoreModule]
    conditions:
      modules: [flask]
      properties:
        - name: acme.web.enabled
          match_if_missing: true
```
"""

import logging
import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .errors import MetadataError

logger = logging.getLogger(__name__)

NEUTRAL_PRIORITY = 0


class PropertyCondition(BaseModel):
    """Environment property a module requires."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Dotted property key")
    having_value: str | None = Field(None, description="Expected value (case-insensitive)")
    match_if_missing: bool = Field(default=False, description="Whether an absent property matches")


class ModuleConditions(BaseModel):
    """Condition facts evaluated by the filter pipeline."""

    model_config = ConfigDict(frozen=True)

    modules: tuple[str, ...] = Field(default=(), description="Importable modules required for activation")
    properties: tuple[PropertyCondition, ...] = Field(default=(), description="Required environment properties")


class ModuleMetadata(BaseModel):
    """Ordering and condition facts for a single candidate module."""

    model_config = ConfigDict(frozen=True)

    priority: int = Field(default=NEUTRAL_PRIORITY, description="Lower values are processed earlier")
    before: frozenset[str] = Field(default_factory=frozenset, description="Modules this one must precede")
    after: frozenset[str] = Field(default_factory=frozenset, description="Modules this one must follow")
    before_all: bool = Field(default=False, description="Precede every module not also marked before_all")
    after_all: bool = Field(default=False, description="Follow every module not also marked after_all")
    conditions: ModuleConditions = Field(default_factory=ModuleConditions)


class MetadataFile(BaseModel):
    """Top-level metadata index schema."""

    modules: dict[str, ModuleMetadata] = Field(default_factory=dict)

    @field_validator("modules", mode="before")
    @classmethod
    def _empty_entries_are_defaults(cls, value: Any) -> Any:
        # `acme.Core:` with no body parses as None
        if value is None:
            return {}
        if isinstance(value, dict):
            return {module_id: {} if entry is None else entry for module_id, entry in value.items()}
        return value


DEFAULT_METADATA = ModuleMetadata()


class MetadataStore:
    """Read-only lookup of module metadata."""

    def __init__(self, entries: dict[str, ModuleMetadata] | None = None, source: Path | None = None):
        self._entries = dict(entries or {})
        self.source = source

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> "MetadataStore":
        """Build a store from a parsed metadata document.

        Raises:
            ValidationError: If the document does not match the schema
        """
        parsed = MetadataFile(**(data or {}))
        return cls(parsed.modules, source=source)

    @classmethod
    def load(cls, path: Path | None, *, required: bool = False) -> "MetadataStore":
        """Load metadata from a YAML file.

        A missing or malformed source falls back to an empty store so every
        module gets neutral defaults.

        Args:
            path: Metadata file path (None means no metadata)
            required: Raise instead of falling back

        Returns:
            MetadataStore instance

        Raises:
            MetadataError: If required and the source cannot be loaded
        """
        if path is None:
            if required:
                raise MetadataError(Path("<none>"), "no metadata source configured")
            return cls()

        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("top-level document must be a mapping")
            store = cls.from_dict(data, source=path)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            if required:
                raise MetadataError(path, str(e)) from e
            logger.warning(f"Ignoring unreadable module metadata {path}: {e}")
            return cls(source=path)

        logger.debug(f"Loaded metadata for {len(store)} modules from {path}")
        return store

    def get(self, module_id: str) -> ModuleMetadata:
        """Get metadata for a module, or neutral defaults if unknown."""
        return self._entries.get(module_id, DEFAULT_METADATA)

    def get_priority(self, module_id: str) -> int:
        return self.get(module_id).priority

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MetadataStore(source={self.source}, modules={len(self._entries)})"


_cache: dict[tuple[str | None, str | None], MetadataStore] = {}
_cache_lock = threading.Lock()


def get_metadata_store(path: Path | None, context: str | None = None, *, required: bool = False) -> MetadataStore:
    """Get a cached metadata store for a source and context.

    The cache is keyed on the resolved source path and the context identity
    (normally Environment.identity). Loading under a new context evicts the
    entries cached for the same source under any other context.

    Args:
        path: Metadata file path
        context: Identity of the resolution context
        required: Passed to MetadataStore.load

    Returns:
        Cached or freshly loaded MetadataStore
    """
    key = (str(Path(path).resolve()) if path is not None else None, context)
    with _cache_lock:
        store = _cache.get(key)
        if store is None:
            for stale in [k for k in _cache if k[0] == key[0]]:
                del _cache[stale]
            store = MetadataStore.load(path, required=required)
            _cache[key] = store
        return store


def clear_metadata_cache() -> None:
    """Drop every cached metadata store."""
    with _cache_lock:
        _cache.clear()
