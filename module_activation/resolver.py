"""Full activation resolution - wiring of all collaborators.

Typical host usage:

    resolver = ActivationResolver.from_settings(properties={"activation.exclude": "acme.cache.CacheModule"})
    result = resolver.resolve([ActivationRequest(site="app")])
    for site, module_id in result.imports:
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from .conditions import ConditionEvaluationReport
from .conditions import ConditionFilter
from .conditions import default_filters
from .coordinator import Import
from .coordinator import ImportCoordinator
from .environment import Environment
from .events import ActivationEventBus
from .events import ActivationListener
from .exclusions import ExclusionResolver
from .metadata import MetadataStore
from .metadata import get_metadata_store
from .plugins import FILTER_GROUP
from .plugins import LISTENER_GROUP
from .plugins import discover_plugins
from .plugins import load_plugins
from .registry import ENTRY_POINT_GROUP
from .registry import ModuleRegistry
from .selector import ActivationRequest
from .selector import ActivationSelector
from .settings import SettingsManager

logger = logging.getLogger(__name__)


@dataclass
class ActivationResult:
    """Outcome of a full resolution.

    Attributes:
        imports: Modules to activate in processing order, with owning sites
        exclusions: Union of all sites' exclusions
        report: Condition evaluation report
    """

    imports: list[Import] = field(default_factory=list)
    exclusions: set[str] = field(default_factory=set)
    report: ConditionEvaluationReport = field(default_factory=ConditionEvaluationReport)

    @property
    def modules(self) -> list[str]:
        return [item.module_id for item in self.imports]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "modules": [{"module": item.module_id, "site": str(item.site)} for item in self.imports],
            "exclusions": sorted(self.exclusions),
            "report": self.report.to_dict(),
        }


class ActivationResolver:
    """Runs every site through selection, then coordinates the global order."""

    def __init__(
        self,
        registry: ModuleRegistry,
        environment: Environment,
        metadata: MetadataStore,
        filters: list[ConditionFilter] | None = None,
        listeners: list[ActivationListener] | None = None,
        exclusion_resolver: ExclusionResolver | None = None,
    ):
        self.registry = registry
        self.environment = environment
        self.metadata = metadata
        self.filters = default_filters() if filters is None else list(filters)
        self.listeners = list(listeners or [])
        self.exclusion_resolver = exclusion_resolver

    @classmethod
    def from_settings(
        cls,
        settings_manager: SettingsManager | None = None,
        properties: dict[str, Any] | None = None,
        candidate_files: list[Path] | None = None,
        metadata_path: Path | None = None,
        use_os_environ: bool = True,
        discover: bool = True,
    ) -> ActivationResolver:
        """Build a resolver from merged settings and explicit overrides.

        Args:
            settings_manager: Settings source (defaults to standard scopes)
            properties: Explicit environment properties (highest precedence)
            candidate_files: Candidate list files, added after the configured ones
            metadata_path: Metadata index, overrides the configured one
            use_os_environ: Whether the environment consults os.environ
            discover: Whether to scan entry points for candidates and plugins

        Returns:
            Configured ActivationResolver
        """
        settings_manager = settings_manager or SettingsManager()
        merged = settings_manager.get_merged_settings()
        activation = settings_manager.get_activation_settings()

        environment = Environment(properties=properties, settings=merged, use_os_environ=use_os_environ)

        files = [Path(p) for p in activation.candidates] + list(candidate_files or [])
        registry = ModuleRegistry(
            list_files=files,
            entry_point_group=ENTRY_POINT_GROUP if discover else None,
        )

        source = metadata_path or (Path(activation.metadata) if activation.metadata else None)
        metadata = get_metadata_store(source, environment.identity, required=activation.metadata_required)

        if activation.filters is None:
            filters = default_filters()
            if discover:
                filters.extend(discover_plugins(FILTER_GROUP))
        else:
            filters = load_plugins(activation.filters)

        listeners = load_plugins(activation.listeners)
        if discover:
            listeners.extend(discover_plugins(LISTENER_GROUP))

        logger.debug(
            f"Resolver configured: {len(files)} candidate files, metadata={source}, "
            f"{len(filters)} filters, {len(listeners)} listeners"
        )
        return cls(registry, environment, metadata, filters=filters, listeners=listeners)

    def create_selector(self, report: ConditionEvaluationReport) -> ActivationSelector:
        return ActivationSelector(
            self.registry,
            self.environment,
            self.metadata,
            filters=self.filters,
            exclusion_resolver=self.exclusion_resolver,
            event_bus=ActivationEventBus(self.listeners),
            report=report,
        )

    def resolve(self, requests: list[ActivationRequest]) -> ActivationResult:
        """Resolve the activated modules for all sites.

        Every site is selected and registered before the global order is
        computed, so exclusions from any site apply to all of them.

        Args:
            requests: One request per site, in registration order

        Returns:
            ActivationResult

        Raises:
            ActivationError: On any fatal configuration problem
        """
        report = ConditionEvaluationReport()
        selector = self.create_selector(report)
        coordinator = ImportCoordinator(self.metadata)

        for request in requests:
            coordinator.process(request.site, selector.get_entry(request))

        imports = coordinator.select_imports()
        logger.info(f"Activating {len(imports)} modules for {len(requests)} sites")
        return ActivationResult(imports=imports, exclusions=coordinator.exclusions, report=report)


def resolve_activation(
    requests: list[ActivationRequest] | None = None,
    **kwargs: Any,
) -> ActivationResult:
    """Resolve with settings-driven defaults.

    Args:
        requests: Site requests (defaults to a single ``application`` site)
        **kwargs: Passed to ActivationResolver.from_settings

    Returns:
        ActivationResult
    """
    resolver = ActivationResolver.from_settings(**kwargs)
    return resolver.resolve(requests or [ActivationRequest(site="application")])
