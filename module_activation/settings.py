"""Settings manager for module activation settings.yaml files.

Manages three-scope settings system:
- User global (~/.module-activation/settings.yaml)
- Project (.module-activation/settings.yaml)
- Local (.module-activation/settings.local.yaml)
"""

import logging
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import BaseModel
from pydantic import Field

logger = logging.getLogger(__name__)

SETTINGS_DIR_NAME = ".module-activation"

ScopeType = Literal["user", "project", "local"]

SCOPES: tuple[ScopeType, ...] = ("user", "project", "local")


class ActivationSettings(BaseModel):
    """The ``activation`` section of merged settings."""

    enabled: bool = Field(default=True, description="Global activation switch")
    exclude: list[str] = Field(default_factory=list, description="Module ids excluded for every site")
    metadata: str | None = Field(None, description="Path to the metadata YAML index")
    metadata_required: bool = Field(default=False, description="Fail instead of falling back to defaults")
    candidates: list[str] = Field(default_factory=list, description="Candidate list files")
    filters: list[str] | None = Field(None, description="Filter plugin refs ('pkg.mod:Class'); None = built-ins")
    listeners: list[str] = Field(default_factory=list, description="Listener plugin refs ('pkg.mod:Class')")


class SettingsManager:
    """Reads and updates activation settings across user/project/local scopes."""

    def __init__(self, settings_dir: Path | None = None, user_dir: Path | None = None):
        """Locate the scope files.

        Args:
            settings_dir: Directory holding the project and local files
                (default: .module-activation under the working directory)
            user_dir: Directory holding the user file (default: ~/.module-activation)
        """
        if settings_dir is None:
            settings_dir = Path(SETTINGS_DIR_NAME)
        if user_dir is None:
            user_dir = Path.home() / SETTINGS_DIR_NAME

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = settings_dir / "settings.yaml"
        self.local_settings_file = settings_dir / "settings.local.yaml"

    def _scope_file(self, scope: ScopeType) -> Path:
        file_map = {
            "user": self.user_settings_file,
            "project": self.project_settings_file,
            "local": self.local_settings_file,
        }
        return file_map.get(scope, self.project_settings_file)

    def get_activation_settings(self) -> ActivationSettings:
        """Get the validated ``activation`` section of merged settings."""
        section = self.get_merged_settings().get("activation") or {}
        return ActivationSettings(**section)

    def add_exclusion(self, module_id: str, scope: ScopeType = "project") -> None:
        """Append a module to the scope's ``activation.exclude`` list.

        Other keys in the scope file are preserved. Adding an id that is
        already excluded leaves the file untouched.
        """
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file) or {}
        activation = settings.get("activation") or {}
        exclude = list(activation.get("exclude") or [])
        if module_id in exclude:
            return

        activation["exclude"] = [*exclude, module_id]
        settings["activation"] = activation
        self._write_settings(target_file, settings)
        logger.info(f"Added {scope} exclusion for {module_id}")

    def remove_exclusion(self, module_id: str, scope: ScopeType = "project") -> bool:
        """Drop a module from the scope's ``activation.exclude`` list.

        Returns:
            True if the scope excluded the module, False otherwise
        """
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file)

        activation = (settings or {}).get("activation") or {}
        exclude = activation.get("exclude") or []
        if module_id not in exclude:
            return False

        exclude.remove(module_id)

        if not exclude:
            del activation["exclude"]

        self._write_settings(target_file, settings)
        logger.info(f"Removed {scope} exclusion for {module_id}")
        return True

    def get_merged_settings(self) -> dict[str, Any]:
        """Combine the user, project and local scopes.

        Scopes are applied in that order, so a key set in the local file wins
        over the same key in the project or user file. Nested mappings are
        merged key by key; lists and scalars are replaced whole.
        """
        merged: dict[str, Any] = {}
        for scope in SCOPES:
            data = self._read_settings(self._scope_file(scope))
            if data:
                merged = self._deep_merge(merged, data)
        return merged

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Load one scope file.

        Returns:
            Parsed mapping, {} for an empty file, or None when the file is
            absent or unreadable
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(path, "w", encoding="utf-8") as f:
                yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to write settings to {path}: {e}")
            raise

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Merge overlay into a copy of base, recursing into nested mappings."""
        result = dict(base)
        for key, value in overlay.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                result[key] = self._deep_merge(current, value)
            else:
                result[key] = value
        return result
