"""Module activation - decide which configuration modules activate and in what order.

Candidates from a module registry are deduplicated, filtered by cheap
metadata-driven conditions, stripped of exclusions, and ordered by priority
and before/after constraints. Multiple request sites are coordinated in two
phases so every site's exclusions apply globally.
"""

from .conditions import ConditionEvaluationReport
from .conditions import ConditionFilter
from .conditions import ConditionFilterPipeline
from .conditions import OnModuleCondition
from .conditions import OnPropertyCondition
from .coordinator import Entry
from .coordinator import Import
from .coordinator import ImportCoordinator
from .environment import Environment
from .errors import ActivationError
from .errors import ConditionFilterError
from .errors import CyclicOrderingError
from .errors import InvalidExclusionError
from .errors import MetadataError
from .errors import PluginLoadError
from .errors import PropertyConversionError
from .errors import RegistryError
from .events import ActivationEventBus
from .events import ActivationImportEvent
from .exclusions import ExclusionResolver
from .metadata import MetadataStore
from .metadata import ModuleMetadata
from .metadata import PropertyCondition
from .metadata import get_metadata_store
from .registry import ModuleRegistry
from .resolver import ActivationResolver
from .resolver import ActivationResult
from .resolver import resolve_activation
from .selector import ActivationRequest
from .selector import ActivationSelector
from .sorter import PrioritySorter

__all__ = [
    # Resolution
    "ActivationResolver",
    "ActivationResult",
    "ActivationRequest",
    "ActivationSelector",
    "resolve_activation",
    # Core components
    "ImportCoordinator",
    "Entry",
    "Import",
    "PrioritySorter",
    "ExclusionResolver",
    "MetadataStore",
    "ModuleMetadata",
    "PropertyCondition",
    "get_metadata_store",
    "ModuleRegistry",
    "Environment",
    # Conditions
    "ConditionFilter",
    "ConditionFilterPipeline",
    "ConditionEvaluationReport",
    "OnModuleCondition",
    "OnPropertyCondition",
    # Events
    "ActivationEventBus",
    "ActivationImportEvent",
    # Errors
    "ActivationError",
    "ConditionFilterError",
    "CyclicOrderingError",
    "InvalidExclusionError",
    "MetadataError",
    "PluginLoadError",
    "PropertyConversionError",
    "RegistryError",
]
