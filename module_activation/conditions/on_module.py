"""Filter requiring importable Python modules."""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .base import ConditionFilter

if TYPE_CHECKING:
    from ..metadata import MetadataStore

logger = logging.getLogger(__name__)


def is_module_available(name: str) -> bool:
    """Check whether a module can be imported without importing it.

    Parent packages of dotted names are imported by find_spec, the module
    itself is not.
    """
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


class OnModuleCondition(ConditionFilter):
    """Keeps candidates whose ``conditions.modules`` are all importable."""

    def __init__(self) -> None:
        super().__init__()
        self._available: dict[str, bool] = {}

    def _is_available(self, name: str) -> bool:
        if name not in self._available:
            self._available[name] = is_module_available(name)
        return self._available[name]

    def match(self, candidates: Sequence[str | None], metadata: MetadataStore) -> list[bool]:
        results = []
        for candidate in candidates:
            if candidate is None:
                results.append(True)
                continue
            missing = [name for name in metadata.get(candidate).conditions.modules if not self._is_available(name)]
            if missing:
                logger.debug(f"[condition:module] {candidate} rejected, missing {missing}")
                results.append(self._reject(candidate, f"required modules not found: {', '.join(missing)}"))
            else:
                results.append(True)
        return results
