"""Ordered condition filter pipeline."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ..errors import ConditionFilterError
from .base import ConditionFilter
from .report import ConditionEvaluationReport

if TYPE_CHECKING:
    from ..environment import Environment
    from ..metadata import MetadataStore

logger = logging.getLogger(__name__)


class ConditionFilterPipeline:
    """Runs condition filters in registration order over a candidate list.

    Every filter sees all original slots; a slot rejected by an earlier
    filter is passed as None so later filters skip it.
    """

    def __init__(
        self,
        filters: list[ConditionFilter],
        metadata: MetadataStore,
        environment: Environment | None = None,
        report: ConditionEvaluationReport | None = None,
    ):
        """Initialize pipeline.

        Args:
            filters: Filters in evaluation order
            metadata: Metadata consulted by the filters
            environment: Injected into each filter
            report: Receives rejection outcomes
        """
        self.filters = list(filters)
        self.metadata = metadata
        self.report = report
        for condition_filter in self.filters:
            condition_filter.configure(environment=environment, report=report)

    def filter(self, candidates: list[str]) -> list[str]:
        """Remove candidates rejected by any filter.

        Args:
            candidates: Candidate ids in order

        Returns:
            Surviving candidates in original relative order. The input list
            itself is returned when nothing was rejected.

        Raises:
            ConditionFilterError: If a filter raises or returns a malformed result
        """
        start = time.perf_counter()
        slots: list[str | None] = list(candidates)
        skipped = False

        for condition_filter in self.filters:
            try:
                match = condition_filter.match(list(slots), self.metadata)
            except Exception as e:
                raise ConditionFilterError(condition_filter.name, str(e) or type(e).__name__) from e

            if len(match) != len(slots):
                raise ConditionFilterError(
                    condition_filter.name,
                    f"returned {len(match)} results for {len(slots)} candidates",
                )

            for index, keep in enumerate(match):
                if slots[index] is not None and not keep:
                    slots[index] = None
                    skipped = True

        if not skipped:
            return candidates

        result = [candidate for candidate in slots if candidate is not None]
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"Filtered {len(candidates) - len(result)} activation candidates in {elapsed_ms:.1f} ms")
        return result

    def __repr__(self) -> str:
        return f"ConditionFilterPipeline({', '.join(f.name for f in self.filters)})"
