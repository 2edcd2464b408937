"""Pytest configuration for module activation tests."""

import pytest

from module_activation.environment import Environment
from module_activation.metadata import MetadataStore
from module_activation.metadata import clear_metadata_cache


@pytest.fixture(autouse=True)
def _isolated_metadata_cache():
    """Keep the process-wide metadata cache from leaking between tests."""
    clear_metadata_cache()
    yield
    clear_metadata_cache()


@pytest.fixture
def make_metadata():
    """Build a MetadataStore from a ``modules`` mapping."""

    def _make(modules: dict | None = None) -> MetadataStore:
        return MetadataStore.from_dict({"modules": modules or {}})

    return _make


@pytest.fixture
def make_environment():
    """Build an Environment isolated from os.environ."""

    def _make(properties: dict | None = None, settings: dict | None = None) -> Environment:
        return Environment(properties=properties, settings=settings, use_os_environ=False)

    return _make
