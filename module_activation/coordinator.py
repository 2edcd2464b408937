"""Deferred two-phase import coordination across request sites.

Each site registers the Entry it resolved. Only once every site has
registered are the entries unioned, exclusions subtracted and the result
sorted, so an exclusion from a late site still removes a module accepted by
an earlier one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import NamedTuple

from .metadata import MetadataStore
from .sorter import PrioritySorter

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    """Resolution outcome of one site.

    Attributes:
        configurations: Accepted module ids in order
        exclusions: Ids the site excluded
    """

    configurations: list[str] = field(default_factory=list)
    exclusions: set[str] = field(default_factory=set)

    @classmethod
    def empty(cls) -> Entry:
        return cls()


class Import(NamedTuple):
    """A module to activate together with the site that first requested it."""

    site: Any
    module_id: str


class ImportCoordinator:
    """Collects per-site entries and produces the global activation order."""

    def __init__(
        self,
        metadata: MetadataStore,
        sorter_factory: Callable[[MetadataStore], PrioritySorter] = PrioritySorter,
    ):
        self.metadata = metadata
        self._sorter_factory = sorter_factory
        self._first_site_of: dict[str, Any] = {}
        self._entries: list[Entry] = []
        self._result: list[Import] | None = None
        self._lock = threading.Lock()

    def process(self, site: Any, entry: Entry) -> None:
        """Register the entry a site resolved.

        The first site to register a module owns it.
        """
        with self._lock:
            self._entries.append(entry)
            for module_id in entry.configurations:
                self._first_site_of.setdefault(module_id, site)
            self._result = None
        logger.debug(f"Registered {len(entry.configurations)} modules from site {site!r}")

    def select_imports(self) -> list[Import]:
        """Get every module to activate, in processing order.

        Must only be called after all sites have been processed. The result
        is cached until the next process() call.

        Raises:
            CyclicOrderingError: If ordering constraints form a cycle
        """
        with self._lock:
            if self._result is not None:
                return list(self._result)
            if not self._entries:
                return []

            all_exclusions: set[str] = set()
            for entry in self._entries:
                all_exclusions.update(entry.exclusions)

            processed: dict[str, None] = {}
            for entry in self._entries:
                for module_id in entry.configurations:
                    processed.setdefault(module_id, None)
            for module_id in all_exclusions:
                processed.pop(module_id, None)

            ordered = self._sorter_factory(self.metadata).sort(processed)
            self._result = [Import(self._first_site_of[module_id], module_id) for module_id in ordered]
            logger.info(
                f"Selected {len(self._result)} modules from {len(self._entries)} sites "
                f"({len(all_exclusions)} exclusions)"
            )
            return list(self._result)

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    @property
    def exclusions(self) -> set[str]:
        """Union of every registered site's exclusions."""
        merged: set[str] = set()
        for entry in self._entries:
            merged.update(entry.exclusions)
        return merged
