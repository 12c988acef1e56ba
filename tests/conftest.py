"""pytest configuration and fixtures for bundle_mapping tests.

This module provides shared fixtures for resolution tests, including a
default registry, a coordinator, an empty container and the AttributeBundle
descriptor used by most scenarios.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from bundle_mapping import (
        BuildCoordinator,
        ContainerBuilder,
        DriverRegistry,
        ModuleDescriptor,
    )

BUNDLE_PATH = "/srv/app/src/AttributeBundle"
MODEL_NAMESPACE = "App\\Model"


@pytest.fixture(scope="session")
def bundle_mapping_module():
    """Provide the bundle_mapping module as a fixture."""
    import bundle_mapping

    return bundle_mapping


@pytest.fixture
def driver_registry() -> DriverRegistry:
    """Provide the default registry with every provider available."""
    from bundle_mapping import DriverRegistry

    return DriverRegistry.default()


@pytest.fixture
def coordinator(driver_registry: DriverRegistry) -> BuildCoordinator:
    """Provide a coordinator over the default registry."""
    from bundle_mapping import BuildCoordinator

    return BuildCoordinator(driver_registry)


@pytest.fixture
def container() -> Generator[ContainerBuilder, None, None]:
    """Provide an empty container build sequence."""
    from bundle_mapping import ContainerBuilder

    yield ContainerBuilder()


@pytest.fixture
def attribute_descriptor() -> ModuleDescriptor:
    """Provide the AttributeBundle declaration (xml, ORM only)."""
    from bundle_mapping import ModuleDescriptor

    return ModuleDescriptor(
        identity="AttributeBundle",
        model_namespace=MODEL_NAMESPACE,
        mapping_format="xml",
        supported_drivers=("doctrine/orm",),
        path=BUNDLE_PATH,
    )


@pytest.fixture
def config_files_path() -> str:
    """Provide the mapping directory derived for the AttributeBundle."""
    return f"{BUNDLE_PATH}/Resources/config/doctrine/model"
