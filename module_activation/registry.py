"""Module registry - discovery of activation candidates.

Candidates come from, in order:
1. Installed packages advertising ``module_activation.candidates`` entry points
2. Declarative list files (one id per line, ``#`` starts a comment)
3. Ids passed explicitly by the host

Duplicates are kept here; the selector collapses them.
"""

import logging
from importlib.metadata import entry_points
from pathlib import Path

from .errors import RegistryError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "module_activation.candidates"


def read_list_file(path: Path) -> list[str]:
    """Read module ids from a list file.

    Args:
        path: File with one id per line

    Returns:
        Ids in file order (blank lines and comments dropped)
    """
    ids = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            ids.append(line)
    return ids


class ModuleRegistry:
    """Ordered catalog of candidate module ids."""

    def __init__(
        self,
        list_files: list[Path] | None = None,
        entry_point_group: str | None = ENTRY_POINT_GROUP,
        extra: list[str] | None = None,
    ):
        """Initialize registry.

        Args:
            list_files: Declarative candidate list files
            entry_point_group: Entry point group to scan (None disables scanning)
            extra: Additional ids supplied by the host
        """
        self.list_files = [Path(p) for p in (list_files or [])]
        self.entry_point_group = entry_point_group
        self.extra = list(extra or [])

    def _load_entry_points(self) -> list[str]:
        if not self.entry_point_group:
            return []
        ids = []
        for ep in entry_points(group=self.entry_point_group):
            ids.append(ep.value.replace(":", "."))
            logger.debug(f"[registry] {ep.name} -> {ids[-1]} (entry point)")
        return ids

    def load_candidates(self) -> list[str]:
        """Get all candidate ids, duplicates included.

        Raises:
            RegistryError: If no candidates were found anywhere
        """
        candidates = self._load_entry_points()

        for list_file in self.list_files:
            if not list_file.exists():
                logger.debug(f"[registry] candidate list {list_file} not found, skipping")
                continue
            ids = read_list_file(list_file)
            logger.debug(f"[registry] {len(ids)} candidates from {list_file}")
            candidates.extend(ids)

        candidates.extend(self.extra)

        if not candidates:
            sources = ", ".join(str(p) for p in self.list_files) or "none"
            raise RegistryError(
                f"No activation candidates found.\n"
                f"  Entry point group: {self.entry_point_group or 'disabled'}\n"
                f"  List files: {sources}\n"
                f"If you are using custom packaging, make sure the candidate list is included."
            )
        return candidates

    def __repr__(self) -> str:
        return f"ModuleRegistry(files={len(self.list_files)}, group={self.entry_point_group!r})"
