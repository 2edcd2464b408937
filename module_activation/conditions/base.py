"""Condition filter plugin interface."""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .report import ConditionEvaluationReport

if TYPE_CHECKING:
    from ..environment import Environment
    from ..metadata import MetadataStore


class ConditionFilter(ABC):
    """Bulk predicate deciding which candidates may be activated.

    Filters see every candidate slot in original order. Slots already
    rejected by an earlier filter are None and must be answered True.
    Implementations must not keep state that changes their answers between
    calls with the same inputs.
    """

    def __init__(self) -> None:
        self.environment: Environment | None = None
        self.report: ConditionEvaluationReport | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    def configure(
        self,
        environment: Environment | None = None,
        report: ConditionEvaluationReport | None = None,
    ) -> None:
        """Inject collaborators before first use."""
        if environment is not None:
            self.environment = environment
        if report is not None:
            self.report = report

    @abstractmethod
    def match(self, candidates: Sequence[str | None], metadata: MetadataStore) -> list[bool]:
        """Evaluate candidates.

        Args:
            candidates: Candidate ids; None marks an already rejected slot
            metadata: Precomputed module metadata

        Returns:
            One bool per slot, True to keep the candidate
        """

    def _reject(self, module_id: str, message: str) -> bool:
        if self.report is not None:
            self.report.record(self.name, module_id, message)
        return False

    def __repr__(self) -> str:
        return f"{self.name}()"
