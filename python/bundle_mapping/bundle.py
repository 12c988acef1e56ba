"""Resource bundle base class.

Subclass ResourceBundle and declare the persistence mapping as class
attributes; build() registers the matching compiler passes.

Example:
    >>> class AttributeBundle(ResourceBundle):
    ...     model_namespace = "App\\Model"
    ...     mapping_format = MappingFormat.ANNOTATION
    ...     supported_drivers = (DriverKind.RELATIONAL_ORM,)
    ...
    >>> container = ContainerBuilder()
    >>> AttributeBundle().build(container)
    >>> container.compiler_passes[0].factory_method_name
    'createAnnotationMappingDriver'
"""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from .coordinator import BuildCoordinator
from .descriptor import DEFAULT_MAPPING_DIRECTORY, ModuleDescriptor
from .types import DriverKind, MappingFormat

if TYPE_CHECKING:
    from .container import ContainerBuilder
    from .types import CompilerPassSpec


class ResourceBundle:
    """Base class for bundles that ship a persistence mapping.

    The class name is the bundle identity and must end in ``Bundle``.

    Class Attributes:
        mapping_format: Format of the mapping files, default xml.
        model_namespace: Namespace of the model classes. None disables
            mapping registration for the bundle.
        supported_drivers: Drivers the bundle supports, in registration order.
        doctrine_mapping_directory: Subdirectory holding the mapping files.
        path: Bundle base directory. Defaults to the directory of the module
            defining the subclass.
    """

    mapping_format: ClassVar[MappingFormat | str] = MappingFormat.XML
    model_namespace: ClassVar[str | None] = None
    supported_drivers: ClassVar[tuple[DriverKind | str, ...]] = ()
    doctrine_mapping_directory: ClassVar[str] = DEFAULT_MAPPING_DIRECTORY
    path: ClassVar[str | None] = None

    def get_path(self) -> str:
        if self.path is not None:
            return self.path
        return str(Path(inspect.getfile(type(self))).resolve().parent)

    def descriptor(self) -> ModuleDescriptor:
        """Describe this bundle for the BuildCoordinator."""
        return ModuleDescriptor(
            identity=type(self).__name__,
            model_namespace=self.model_namespace,
            mapping_format=MappingFormat.parse(self.mapping_format),
            supported_drivers=tuple(self.supported_drivers),
            path=self.get_path(),
            doctrine_mapping_directory=self.doctrine_mapping_directory,
        )

    def bundle_prefix(self) -> str:
        return self.descriptor().prefix

    def config_files_path(self) -> str:
        return self.descriptor().config_files_path

    def object_manager_parameter(self) -> str:
        return self.descriptor().object_manager_parameter_name

    def build(
        self,
        container: ContainerBuilder,
        coordinator: BuildCoordinator | None = None,
    ) -> list[CompilerPassSpec]:
        """Register this bundle's mapping compiler passes.

        Args:
            container: Build sequence to register passes in.
            coordinator: Coordinator to resolve with. Defaults to
                BuildCoordinator.default().

        Returns:
            The registered specs (empty without a model namespace).
        """
        coordinator = coordinator or BuildCoordinator.default()
        return coordinator.build(self.descriptor(), container)


__all__ = ["ResourceBundle"]
