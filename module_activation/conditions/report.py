"""Condition evaluation report.

Collects why candidates were rejected so the outcome of a resolution can be
explained after the fact. Recording never influences the result.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field


@dataclass(frozen=True)
class ConditionOutcome:
    """A single rejection recorded by a condition filter.

    Attributes:
        filter_name: Name of the filter that rejected the module
        module_id: Rejected candidate
        message: Human-readable reason
    """

    filter_name: str
    module_id: str
    message: str


@dataclass
class ConditionEvaluationReport:
    """Accumulated condition outcomes and exclusions for one resolution."""

    outcomes: list[ConditionOutcome] = field(default_factory=list)
    exclusions: list[str] = field(default_factory=list)

    def record(self, filter_name: str, module_id: str, message: str) -> None:
        self.outcomes.append(ConditionOutcome(filter_name, module_id, message))

    def record_exclusions(self, exclusions: Iterable[str]) -> None:
        for module_id in exclusions:
            if module_id not in self.exclusions:
                self.exclusions.append(module_id)

    def outcomes_for(self, module_id: str) -> list[ConditionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.module_id == module_id]

    @property
    def rejected(self) -> list[str]:
        """Rejected module ids in first-rejection order."""
        seen: dict[str, None] = {}
        for outcome in self.outcomes:
            seen.setdefault(outcome.module_id, None)
        return list(seen)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "outcomes": [
                {"filter": o.filter_name, "module": o.module_id, "message": o.message} for o in self.outcomes
            ],
            "exclusions": list(self.exclusions),
        }
