"""Priority sorting of activated modules.

Order is decided in three layers, each breaking ties of the next:
1. Alphabetical baseline by id
2. Stable sort by metadata priority (lower first)
3. Before/after constraints, applied by a stable topological sort that
   always emits the ready module appearing earliest in the priority order
"""

import heapq
import logging
from collections.abc import Iterable

from .errors import CyclicOrderingError
from .metadata import MetadataStore

logger = logging.getLogger(__name__)


class PrioritySorter:
    """Orders module ids using metadata priorities and constraints."""

    def __init__(self, metadata: MetadataStore):
        self.metadata = metadata

    def sort(self, ids: Iterable[str]) -> list[str]:
        """Get ids in processing order.

        Args:
            ids: Module ids to order (duplicates are collapsed)

        Returns:
            Ordered list of ids

        Raises:
            CyclicOrderingError: If before/after constraints form a cycle
        """
        baseline = sorted(set(ids))
        by_priority = sorted(baseline, key=self.metadata.get_priority)
        edges = self._build_edges(by_priority)
        return self._topological_sort(by_priority, edges)

    def _build_edges(self, ordered: list[str]) -> dict[str, set[str]]:
        """Build the "must precede" graph restricted to the given ids.

        Returns:
            Map of id -> ids that must come after it
        """
        present = set(ordered)
        edges: dict[str, set[str]] = {module_id: set() for module_id in ordered}
        before_all = {m for m in ordered if self.metadata.get(m).before_all}
        after_all = {m for m in ordered if self.metadata.get(m).after_all}

        for module_id in ordered:
            meta = self.metadata.get(module_id)
            for successor in meta.before:
                if successor in present and successor != module_id:
                    edges[module_id].add(successor)
            for predecessor in meta.after:
                if predecessor in present and predecessor != module_id:
                    edges[predecessor].add(module_id)

        for first in before_all:
            edges[first].update(m for m in ordered if m not in before_all)
        for last in after_all:
            for module_id in ordered:
                if module_id not in after_all:
                    edges[module_id].add(last)

        return edges

    @staticmethod
    def _topological_sort(ordered: list[str], edges: dict[str, set[str]]) -> list[str]:
        position = {module_id: index for index, module_id in enumerate(ordered)}
        in_degree = {module_id: 0 for module_id in ordered}
        for successors in edges.values():
            for successor in successors:
                in_degree[successor] += 1

        ready = [position[m] for m in ordered if in_degree[m] == 0]
        heapq.heapify(ready)
        result: list[str] = []

        while ready:
            current = ordered[heapq.heappop(ready)]
            result.append(current)
            for successor in edges[current]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    heapq.heappush(ready, position[successor])

        if len(result) != len(ordered):
            placed = set(result)
            unresolved = [m for m in ordered if m not in placed]
            raise CyclicOrderingError(unresolved)

        logger.debug(f"Sorted {len(result)} modules")
        return result
