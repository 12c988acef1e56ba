"""Bundle descriptor types for compiler pass resolution.

This module defines the ModuleDescriptor dataclass that carries everything
the BuildCoordinator needs to resolve one bundle, and the per-driver
ModuleContext handed to the CompilerPassFactory.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ConfigurationError
from .prefix import PrefixResolver
from .types import DriverKind, MappingFormat

DEFAULT_MAPPING_DIRECTORY = "model"

CONFIG_FILES_PATH_TEMPLATE = "{path}/Resources/config/doctrine/{directory}"


@dataclass(frozen=True)
class ModuleContext:
    """Per-driver values the argument builders read.

    Attributes:
        driver_kind: Driver the pass is built for.
        config_files_path: Directory holding the mapping files.
        model_namespace: Namespace of the mapped model classes.
        object_manager_parameter_name: ``{prefix}.object_manager``.
        pass_identifier: ``{prefix}.driver.{driver}``.
    """

    driver_kind: DriverKind
    config_files_path: str
    model_namespace: str
    object_manager_parameter_name: str
    pass_identifier: str


@dataclass(frozen=True)
class ModuleDescriptor:
    """Declaration of one bundle's persistence mapping.

    Attributes:
        identity: Bundle type name, e.g. "AttributeBundle".
        model_namespace: Namespace of the model classes. None means the
            bundle has no persistence mapping and resolution is skipped.
        mapping_format: How mapping metadata is authored.
        supported_drivers: Ordered drivers to register passes for. Tokens
            that are not a DriverKind are kept verbatim and fail during
            resolution.
        path: Bundle base directory.
        doctrine_mapping_directory: Subdirectory of the doctrine config dir.

    Example:
        >>> descriptor = ModuleDescriptor(
        ...     identity="AttributeBundle",
        ...     model_namespace="App\\Model",
        ...     supported_drivers=("doctrine/orm",),
        ...     path="/srv/app/src/AttributeBundle",
        ... )
        >>> descriptor.prefix
        'attribute'
        >>> descriptor.object_manager_parameter_name
        'attribute.object_manager'
    """

    identity: str
    model_namespace: str | None = None
    mapping_format: MappingFormat = MappingFormat.XML
    supported_drivers: tuple[DriverKind | str, ...] = ()
    path: str = ""
    doctrine_mapping_directory: str = DEFAULT_MAPPING_DIRECTORY

    def __post_init__(self) -> None:
        if not self.identity:
            raise ConfigurationError("Bundle identity must not be empty.")

        object.__setattr__(self, "mapping_format", MappingFormat.parse(self.mapping_format))

        drivers = tuple(DriverKind.coerce(driver) for driver in self.supported_drivers)
        seen: set[str] = set()
        for driver in drivers:
            token = getattr(driver, "value", driver)
            if token in seen:
                raise ConfigurationError(
                    f"Driver '{token}' is declared more than once for {self.identity}.",
                    metadata={"bundle": self.identity, "driver": token},
                )
            seen.add(token)
        object.__setattr__(self, "supported_drivers", drivers)

    @property
    def has_mapping(self) -> bool:
        """Whether the bundle declares a model namespace."""
        return self.model_namespace is not None

    @property
    def prefix(self) -> str:
        """Lowercase underscore prefix derived from the identity."""
        return PrefixResolver.resolve(self.identity)

    @property
    def config_files_path(self) -> str:
        """Absolute directory where the mapping files are stored."""
        return CONFIG_FILES_PATH_TEMPLATE.format(
            path=self.path.rstrip("/"),
            directory=self.doctrine_mapping_directory.lower(),
        )

    @property
    def object_manager_parameter_name(self) -> str:
        return f"{self.prefix}.object_manager"

    def pass_identifier(self, driver_kind: DriverKind) -> str:
        return f"{self.prefix}.driver.{driver_kind.value}"

    def context_for(self, driver_kind: DriverKind) -> ModuleContext:
        """Build the factory context for one driver.

        Raises:
            ConfigurationError: If the bundle has no model namespace.
        """
        if self.model_namespace is None:
            raise ConfigurationError(
                f"{self.identity} has no model namespace to map.",
                metadata={"bundle": self.identity},
            )
        return ModuleContext(
            driver_kind=driver_kind,
            config_files_path=self.config_files_path,
            model_namespace=self.model_namespace,
            object_manager_parameter_name=self.object_manager_parameter_name,
            pass_identifier=self.pass_identifier(driver_kind),
        )


__all__ = [
    "CONFIG_FILES_PATH_TEMPLATE",
    "DEFAULT_MAPPING_DIRECTORY",
    "ModuleContext",
    "ModuleDescriptor",
]
