"""Tests for ModuleRegistry candidate discovery."""

from types import SimpleNamespace

import pytest

from module_activation import registry as registry_module
from module_activation.errors import RegistryError
from module_activation.registry import ModuleRegistry
from module_activation.registry import read_list_file


def test_read_list_file_skips_comments_and_blanks(tmp_path):
    path = tmp_path / "candidates.txt"
    path.write_text("# core\nacme.core.CoreModule\n\n  acme.web.WebModule  # web\n")

    assert read_list_file(path) == ["acme.core.CoreModule", "acme.web.WebModule"]


def test_sources_are_concatenated_in_order(tmp_path, monkeypatch):
    """Test entry points, then files, then extras, duplicates kept."""
    first = tmp_path / "first.txt"
    first.write_text("b\na\n")
    second = tmp_path / "second.txt"
    second.write_text("a\nc\n")

    def fake_entry_points(group):
        assert group == "module_activation.candidates"
        return [SimpleNamespace(name="ep", value="pkg.mod:EpModule")]

    monkeypatch.setattr(registry_module, "entry_points", fake_entry_points)

    registry = ModuleRegistry(list_files=[first, second], extra=["d"])

    assert registry.load_candidates() == ["pkg.mod.EpModule", "b", "a", "a", "c", "d"]


def test_missing_list_file_is_skipped(tmp_path):
    registry = ModuleRegistry(list_files=[tmp_path / "missing.txt"], entry_point_group=None, extra=["a"])

    assert registry.load_candidates() == ["a"]


def test_disabled_entry_points_are_not_scanned(monkeypatch):
    def fail(group):
        raise AssertionError("entry points should not be scanned")

    monkeypatch.setattr(registry_module, "entry_points", fail)

    assert ModuleRegistry(entry_point_group=None, extra=["a"]).load_candidates() == ["a"]


def test_no_candidates_raises(tmp_path):
    """Test an empty registry is a configuration error."""
    registry = ModuleRegistry(list_files=[tmp_path / "missing.txt"], entry_point_group=None)

    with pytest.raises(RegistryError, match="No activation candidates found"):
        registry.load_candidates()
