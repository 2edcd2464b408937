"""Filter requiring environment properties."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .base import ConditionFilter

if TYPE_CHECKING:
    from ..metadata import MetadataStore
    from ..metadata import PropertyCondition

logger = logging.getLogger(__name__)


class OnPropertyCondition(ConditionFilter):
    """Keeps candidates whose ``conditions.properties`` are satisfied.

    A property with ``having_value`` must equal it (case-insensitive). Without
    ``having_value`` it must be present and not ``false``. Absent properties
    match only when ``match_if_missing`` is set.
    """

    def _check(self, condition: PropertyCondition) -> str | None:
        """Return a rejection message, or None when the condition holds."""
        value = None
        if self.environment is not None:
            value = self.environment.get_property(condition.name)

        if value is None:
            if condition.match_if_missing:
                return None
            return f"property '{condition.name}' is not set"

        if condition.having_value is not None:
            if value.strip().lower() != condition.having_value.strip().lower():
                return f"property '{condition.name}' is '{value}', expected '{condition.having_value}'"
            return None

        if value.strip().lower() == "false":
            return f"property '{condition.name}' is false"
        return None

    def match(self, candidates: Sequence[str | None], metadata: MetadataStore) -> list[bool]:
        results = []
        for candidate in candidates:
            if candidate is None:
                results.append(True)
                continue
            failure = None
            for condition in metadata.get(candidate).conditions.properties:
                failure = self._check(condition)
                if failure:
                    break
            if failure:
                logger.debug(f"[condition:property] {candidate} rejected: {failure}")
                results.append(self._reject(candidate, failure))
            else:
                results.append(True)
        return results
