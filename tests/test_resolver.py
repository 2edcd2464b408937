"""End-to-end tests for ActivationResolver."""

from unittest.mock import Mock

import pytest
import yaml

from module_activation.conditions import OnPropertyCondition
from module_activation.errors import CyclicOrderingError
from module_activation.errors import MetadataError
from module_activation.events import ActivationImportEvent
from module_activation.registry import ModuleRegistry
from module_activation.resolver import ActivationResolver
from module_activation.resolver import resolve_activation
from module_activation.selector import ActivationRequest
from module_activation.settings import SettingsManager

CANDIDATES = """\
acme.cache.CacheModule
acme.web.WebModule
acme.core.CoreModule
acme.extra.ExtraModule
"""

METADATA = {
    "modules": {
        "acme.core.CoreModule": {"priority": -10},
        "acme.web.WebModule": {
            "after": ["acme.core.CoreModule"],
            "conditions": {"modules": ["no_such_dependency_xyz"]},
        },
        "acme.cache.CacheModule": {"after": ["acme.web.WebModule"]},
    }
}


@pytest.fixture
def project(tmp_path):
    """A project with candidates, metadata and settings scopes."""
    candidates = tmp_path / "candidates.txt"
    candidates.write_text(CANDIDATES)
    metadata = tmp_path / "metadata.yaml"
    metadata.write_text(yaml.dump(METADATA))

    manager = SettingsManager(settings_dir=tmp_path / "project", user_dir=tmp_path / "user")

    def write_settings(activation: dict, scope_file=None):
        path = scope_file or manager.project_settings_file
        path.parent.mkdir(parents=True, exist_ok=True)
        section = {"candidates": [str(candidates)], "metadata": str(metadata)}
        section.update(activation)
        path.write_text(yaml.dump({"activation": section}))

    return manager, write_settings


def _resolver(manager, **kwargs):
    return ActivationResolver.from_settings(manager, use_os_environ=False, discover=False, **kwargs)


class TestFromSettings:
    """Test resolvers assembled from settings files."""

    def test_full_resolution(self, project):
        """Test filters, exclusions and ordering together."""
        manager, write_settings = project
        write_settings({"exclude": ["acme.extra.ExtraModule"]})

        result = _resolver(manager).resolve([ActivationRequest(site="app")])

        assert result.modules == ["acme.core.CoreModule", "acme.cache.CacheModule"]
        assert result.exclusions == {"acme.extra.ExtraModule"}
        assert result.report.rejected == ["acme.web.WebModule"]
        assert all(item.site == "app" for item in result.imports)

    def test_exclusion_from_later_site_applies_globally(self, project):
        manager, write_settings = project
        write_settings({})

        result = _resolver(manager).resolve(
            [ActivationRequest(site="first"), ActivationRequest(site="second", exclude=["acme.core.CoreModule"])]
        )

        assert "acme.core.CoreModule" not in result.modules
        assert {item.site for item in result.imports} == {"first"}

    def test_properties_override_settings(self, project):
        """Test explicit properties win over the settings exclusion list."""
        manager, write_settings = project
        write_settings({"exclude": ["acme.extra.ExtraModule"]})

        result = _resolver(manager, properties={"activation.exclude": "acme.cache.CacheModule"}).resolve(
            [ActivationRequest(site="app")]
        )

        assert result.modules == ["acme.core.CoreModule", "acme.extra.ExtraModule"]

    def test_disabled_in_settings(self, project):
        manager, write_settings = project
        write_settings({"enabled": False})

        result = _resolver(manager).resolve([ActivationRequest(site="app")])

        assert result.imports == []

    def test_local_scope_overrides_project(self, project):
        manager, write_settings = project
        write_settings({})
        write_settings({"enabled": False}, scope_file=manager.local_settings_file)

        assert _resolver(manager).resolve([ActivationRequest(site="app")]).imports == []

    def test_configured_filters_replace_builtins(self, project):
        """Test a filters list replaces the default pipeline."""
        manager, write_settings = project
        write_settings({"filters": ["module_activation.conditions.on_property:OnPropertyCondition"]})

        resolver = _resolver(manager)
        result = resolver.resolve([ActivationRequest(site="app")])

        assert [type(f) for f in resolver.filters] == [OnPropertyCondition]
        assert "acme.web.WebModule" in result.modules

    def test_configured_listeners_receive_events(self, project):
        manager, write_settings = project
        write_settings({"listeners": ["unittest.mock:Mock"]})

        resolver = _resolver(manager)
        resolver.resolve([ActivationRequest(site="app")])

        (listener,) = resolver.listeners
        event = listener.call_args.args[0]
        assert isinstance(event, ActivationImportEvent)
        assert event.site == "app"

    def test_required_metadata_missing(self, project, tmp_path):
        manager, write_settings = project
        write_settings({"metadata": str(tmp_path / "missing.yaml"), "metadata_required": True})

        with pytest.raises(MetadataError):
            _resolver(manager)

    def test_extra_candidate_files(self, project, tmp_path):
        manager, write_settings = project
        write_settings({})
        more = tmp_path / "more.txt"
        more.write_text("acme.more.MoreModule\n")

        result = _resolver(manager, candidate_files=[more]).resolve([ActivationRequest(site="app")])

        assert "acme.more.MoreModule" in result.modules


def test_cycle_aborts_resolution(make_environment, make_metadata):
    metadata = make_metadata({"X": {"after": ["Y"]}, "Y": {"after": ["X"]}})
    resolver = ActivationResolver(
        ModuleRegistry(entry_point_group=None, extra=["X", "Y", "Z"]), make_environment(), metadata
    )

    with pytest.raises(CyclicOrderingError) as exc_info:
        resolver.resolve([ActivationRequest(site="app")])

    assert exc_info.value.unresolved == ["X", "Y"]


def test_listeners_passed_directly(make_environment, make_metadata):
    listener = Mock()
    resolver = ActivationResolver(
        ModuleRegistry(entry_point_group=None, extra=["a"]),
        make_environment(),
        make_metadata(),
        listeners=[listener],
    )

    resolver.resolve([ActivationRequest(site="one"), ActivationRequest(site="two")])

    assert listener.call_count == 2


def test_result_to_dict(make_environment, make_metadata):
    resolver = ActivationResolver(
        ModuleRegistry(entry_point_group=None, extra=["b", "a"]), make_environment(), make_metadata()
    )

    data = resolver.resolve([ActivationRequest(site="app", exclude=["b"])]).to_dict()

    assert data == {
        "modules": [{"module": "a", "site": "app"}],
        "exclusions": ["b"],
        "report": {"outcomes": [], "exclusions": ["b"]},
    }


def test_resolve_activation_defaults_to_application_site(project):
    manager, write_settings = project
    write_settings({})

    result = resolve_activation(settings_manager=manager, use_os_environ=False, discover=False)

    assert {item.site for item in result.imports} == {"application"}
