"""Per-site activation selection.

A selector turns one site's request into an Entry:
candidates -> dedupe -> exclusions (validated, subtracted) -> condition filters.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from .conditions import ConditionEvaluationReport
from .conditions import ConditionFilter
from .conditions import ConditionFilterPipeline
from .coordinator import Entry
from .environment import Environment
from .events import ActivationEventBus
from .events import ActivationImportEvent
from .exclusions import ExclusionResolver
from .metadata import MetadataStore
from .registry import ModuleRegistry

logger = logging.getLogger(__name__)


@dataclass
class ActivationRequest:
    """One site's activation request.

    Attributes:
        site: Identifier of the requesting site
        exclude: Module ids to exclude by name
        exclude_types: Classes, modules or ids to exclude by type
    """

    site: Any
    exclude: list[str] = field(default_factory=list)
    exclude_types: list[object] = field(default_factory=list)


def remove_duplicates(items: Sequence[str]) -> list[str]:
    """Collapse duplicates keeping the first occurrence."""
    return list(dict.fromkeys(items))


class ActivationSelector:
    """Resolves activation entries for request sites."""

    def __init__(
        self,
        registry: ModuleRegistry,
        environment: Environment,
        metadata: MetadataStore,
        filters: list[ConditionFilter] | None = None,
        exclusion_resolver: ExclusionResolver | None = None,
        event_bus: ActivationEventBus | None = None,
        report: ConditionEvaluationReport | None = None,
    ):
        self.registry = registry
        self.environment = environment
        self.metadata = metadata
        self.filters = list(filters or [])
        self.exclusion_resolver = exclusion_resolver or ExclusionResolver()
        self.event_bus = event_bus or ActivationEventBus()
        self.report = report or ConditionEvaluationReport()
        self._pipeline: ConditionFilterPipeline | None = None

    @property
    def pipeline(self) -> ConditionFilterPipeline:
        if self._pipeline is None:
            self._pipeline = ConditionFilterPipeline(
                self.filters, self.metadata, environment=self.environment, report=self.report
            )
        return self._pipeline

    def is_enabled(self) -> bool:
        return self.environment.is_activation_enabled()

    def get_candidates(self) -> list[str]:
        """Get deduplicated candidates from the registry."""
        return remove_duplicates(self.registry.load_candidates())

    def get_entry(self, request: ActivationRequest) -> Entry:
        """Resolve the entry for one site.

        Args:
            request: The site's request

        Returns:
            Entry with accepted modules and the site's exclusions

        Raises:
            InvalidExclusionError: If a resolvable exclusion is not a candidate
            ConditionFilterError: If a filter fails
            RegistryError: If there are no candidates
        """
        if not self.is_enabled():
            logger.info(f"Module activation disabled, site {request.site!r} contributes nothing")
            return Entry.empty()

        candidates = self.get_candidates()
        exclusions = self.exclusion_resolver.resolve(
            request.exclude,
            request.exclude_types,
            self.environment.get_excluded_modules(),
        )
        self.exclusion_resolver.validate(candidates, exclusions)
        candidates = self.exclusion_resolver.subtract(candidates, exclusions)
        candidates = self.pipeline.filter(candidates)

        self.report.record_exclusions(exclusions)
        self.event_bus.publish(
            ActivationImportEvent(site=request.site, configurations=candidates, exclusions=exclusions)
        )
        logger.debug(f"Site {request.site!r} accepted {len(candidates)} modules, excluded {len(exclusions)}")
        return Entry(configurations=candidates, exclusions=set(exclusions))

    def select_imports(self, request: ActivationRequest) -> list[str]:
        """Get the accepted module ids for a single site, unsorted."""
        return self.get_entry(request).configurations
