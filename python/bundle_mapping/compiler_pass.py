"""Compiler pass factory.

Turns a provider, a mapping format and a per-driver ModuleContext into a
CompilerPassSpec.

Resolution Contract:
1. Unavailable provider → None (optional integration not installed)
2. Factory method name is ``create{Format}MappingDriver``; a provider that
   does not expose it → InvalidMappingFormatError
3. Arguments come from the builder registered for the format:
   - xml / yml:   [{path: namespace}, [manager_param], pass_id]
   - annotation:  [[namespace], [path], [manager_param], pass_id]
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .descriptor import ModuleContext
from .exceptions import InvalidMappingFormatError
from .types import CompilerPassSpec, MappingFormat

if TYPE_CHECKING:
    from .registry import ProviderRef

ArgumentBuilder = Callable[[ModuleContext], list[Any]]


def file_mapping_arguments(context: ModuleContext) -> list[Any]:
    """Arguments for mapping files located by directory (xml, yml)."""
    return [
        {context.config_files_path: context.model_namespace},
        [context.object_manager_parameter_name],
        context.pass_identifier,
    ]


def annotation_mapping_arguments(context: ModuleContext) -> list[Any]:
    """Arguments for annotated model classes.

    The pass accepts several namespaces and directories; a bundle always
    supplies exactly one of each.
    """
    return [
        [context.model_namespace],
        [context.config_files_path],
        [context.object_manager_parameter_name],
        context.pass_identifier,
    ]


DEFAULT_ARGUMENT_BUILDERS: Mapping[MappingFormat, ArgumentBuilder] = MappingProxyType(
    {
        MappingFormat.XML: file_mapping_arguments,
        MappingFormat.YAML: file_mapping_arguments,
        MappingFormat.ANNOTATION: annotation_mapping_arguments,
    }
)


class CompilerPassFactory:
    """Builds CompilerPassSpec values from a per-format builder table."""

    def __init__(self, builders: Mapping[MappingFormat, ArgumentBuilder] | None = None) -> None:
        """Initialize the factory.

        Args:
            builders: Argument builder per mapping format. Defaults to
                DEFAULT_ARGUMENT_BUILDERS.
        """
        self._builders: Mapping[MappingFormat, ArgumentBuilder] = MappingProxyType(
            dict(DEFAULT_ARGUMENT_BUILDERS if builders is None else builders)
        )

    def build(
        self,
        provider: ProviderRef,
        mapping_format: MappingFormat,
        context: ModuleContext,
    ) -> CompilerPassSpec | None:
        """Build the compiler pass for one driver.

        Args:
            provider: Provider resolved from the driver registry.
            mapping_format: Declared mapping format.
            context: Per-driver bundle context.

        Returns:
            The spec, or None if the provider is unavailable.

        Raises:
            InvalidMappingFormatError: If the provider or this factory has no
                factory method for the format.
        """
        if not provider.available:
            return None

        method_name = mapping_format.factory_method_name
        builder = self._builders.get(mapping_format)
        if builder is None or not provider.exposes(method_name):
            raise InvalidMappingFormatError(mapping_format, provider.name)

        return CompilerPassSpec(
            driver_kind=context.driver_kind,
            provider_name=provider.name,
            factory_method_name=method_name,
            arguments=builder(context),
            pass_identifier=context.pass_identifier,
        )

    @property
    def formats(self) -> list[MappingFormat]:
        """Mapping formats this factory has argument builders for."""
        return list(self._builders)


__all__ = [
    "ArgumentBuilder",
    "CompilerPassFactory",
    "DEFAULT_ARGUMENT_BUILDERS",
    "annotation_mapping_arguments",
    "file_mapping_arguments",
]
