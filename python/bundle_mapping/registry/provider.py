"""Compiler-pass provider references.

A ProviderRef names the backend component that produces mapping compiler
passes for one driver, the mapping formats it has factory methods for, and
whether its integration is installed in the current build.

Example:
    >>> provider = ProviderRef(name="DoctrineOrmMappingsPass")
    >>> provider.exposes("createXmlMappingDriver")
    True
    >>> provider.factory_methods()
    ['createXmlMappingDriver', 'createYmlMappingDriver', 'createAnnotationMappingDriver']
"""

from __future__ import annotations

import dataclasses
import importlib
from dataclasses import dataclass, field

from ..logging import log_debug
from ..types import MappingFormat


@dataclass(frozen=True)
class ProviderRef:
    """Reference to a mapping compiler-pass provider.

    Attributes:
        name: Provider reference emitted in each CompilerPassSpec.
        formats: Mapping formats the provider has factory methods for.
        available: Whether the provider's integration is installed.
        import_path: Optional ``module.ClassName`` of a Python implementation,
            used by probe() to decide availability.
    """

    name: str
    formats: frozenset[MappingFormat] = field(default_factory=lambda: frozenset(MappingFormat))
    available: bool = True
    import_path: str | None = None

    def factory_methods(self) -> list[str]:
        """Factory method names in MappingFormat declaration order."""
        return [fmt.factory_method_name for fmt in MappingFormat if fmt in self.formats]

    def exposes(self, method_name: str) -> bool:
        return method_name in self.factory_methods()

    def with_availability(self, available: bool) -> ProviderRef:
        return dataclasses.replace(self, available=available)

    def probe(self) -> ProviderRef:
        """Return a copy whose availability reflects whether import_path loads.

        Providers without an import_path are returned unchanged.
        """
        if self.import_path is None:
            return self

        available = _import_class(self.import_path) is not None
        log_debug(
            f"ProviderRef: Probed '{self.name}'",
            {"import_path": self.import_path, "available": available},
        )
        return self.with_availability(available)


def _import_class(class_path: str) -> type | None:
    """Import a class from a ``module.ClassName`` string, or return None."""
    module_path, _, class_name = class_path.rpartition(".")
    if not module_path:
        return None

    try:
        module = importlib.import_module(module_path)
    except ImportError:
        # Optional integration not installed
        return None

    provider_class = getattr(module, class_name, None)
    if not isinstance(provider_class, type):
        return None
    return provider_class


__all__ = ["ProviderRef"]
