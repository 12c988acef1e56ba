"""
Bundle Mapping

Resolves, at container build time, which persistence-mapping compiler pass
each resource bundle needs and with which arguments.

Example:
    >>> from bundle_mapping import (
    ...     BuildCoordinator, ContainerBuilder, DriverKind, MappingFormat, ResourceBundle,
    ... )
    >>> class AttributeBundle(ResourceBundle):
    ...     model_namespace = "App\\Model"
    ...     supported_drivers = (DriverKind.RELATIONAL_ORM,)

    >>> container = ContainerBuilder()
    >>> AttributeBundle().build(container)
    >>> container.compiler_passes[0].pass_identifier
    'attribute.driver.doctrine/orm'

    >>> # Or resolve a descriptor without a bundle class
    >>> from bundle_mapping import ModuleDescriptor
    >>> descriptor = ModuleDescriptor(
    ...     identity="AttributeBundle",
    ...     model_namespace="App\\Model",
    ...     supported_drivers=("doctrine/orm",),
    ... )
    >>> BuildCoordinator.default().resolve(descriptor)[0].factory_method_name
    'createXmlMappingDriver'
"""

from __future__ import annotations

from bundle_mapping.bundle import ResourceBundle
from bundle_mapping.compiler_pass import (
    DEFAULT_ARGUMENT_BUILDERS,
    CompilerPassFactory,
    annotation_mapping_arguments,
    file_mapping_arguments,
)
from bundle_mapping.config import BundleConfig, BundleDeclaration, ConfigPath
from bundle_mapping.container import ContainerBuilder
from bundle_mapping.coordinator import BuildCoordinator
from bundle_mapping.descriptor import (
    DEFAULT_MAPPING_DIRECTORY,
    ModuleContext,
    ModuleDescriptor,
)
from bundle_mapping.exceptions import (
    BundleMappingError,
    ConfigurationError,
    InvalidMappingFormatError,
    UnknownDriverError,
)
from bundle_mapping.logging import (
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from bundle_mapping.prefix import PrefixResolver, underscore
from bundle_mapping.registry import DEFAULT_PROVIDERS, DriverRegistry, ProviderRef
from bundle_mapping.types import (
    CompilerPassSpec,
    DriverKind,
    LogContext,
    MappingFormat,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Types
    "CompilerPassSpec",
    "DriverKind",
    "LogContext",
    "MappingFormat",
    "ModuleContext",
    "ModuleDescriptor",
    "DEFAULT_MAPPING_DIRECTORY",
    # Resolution
    "PrefixResolver",
    "underscore",
    "DriverRegistry",
    "ProviderRef",
    "DEFAULT_PROVIDERS",
    "CompilerPassFactory",
    "DEFAULT_ARGUMENT_BUILDERS",
    "file_mapping_arguments",
    "annotation_mapping_arguments",
    "BuildCoordinator",
    # Container and bundles
    "ContainerBuilder",
    "ResourceBundle",
    # Configuration
    "BundleConfig",
    "BundleDeclaration",
    "ConfigPath",
    # Exceptions
    "BundleMappingError",
    "ConfigurationError",
    "InvalidMappingFormatError",
    "UnknownDriverError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]
