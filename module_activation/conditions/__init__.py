"""Condition filters deciding which candidates may be activated."""

from .base import ConditionFilter
from .on_module import OnModuleCondition
from .on_module import is_module_available
from .on_property import OnPropertyCondition
from .pipeline import ConditionFilterPipeline
from .report import ConditionEvaluationReport
from .report import ConditionOutcome


def default_filters() -> list[ConditionFilter]:
    """Built-in filters in default evaluation order."""
    return [OnModuleCondition(), OnPropertyCondition()]


__all__ = [
    "ConditionFilter",
    "ConditionFilterPipeline",
    "ConditionEvaluationReport",
    "ConditionOutcome",
    "OnModuleCondition",
    "OnPropertyCondition",
    "default_filters",
    "is_module_available",
]
