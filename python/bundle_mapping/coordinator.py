"""Build coordinator - resolves a bundle's mapping compiler passes.

The BuildCoordinator walks a bundle's supported drivers in declared order
and asks the registry and the factory for one compiler pass per driver.

Resolution Contract:
1. No model namespace → empty sequence, nothing looked up
2. Per driver: registry lookup (UnknownDriverError aborts)
3. Unavailable provider → driver skipped
4. Factory build (InvalidMappingFormatError aborts)
5. The full sequence is returned only when every driver resolved

Usage:
    coordinator = BuildCoordinator.default()

    # Inspect the passes
    specs = coordinator.resolve(descriptor)

    # Or register them in a container (all or nothing)
    coordinator.build(descriptor, container)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .compiler_pass import CompilerPassFactory
from .exceptions import BundleMappingError
from .logging import log_debug, log_error, log_info
from .registry import DriverRegistry
from .types import CompilerPassSpec, DriverKind, LogContext

if TYPE_CHECKING:
    from .container import ContainerBuilder
    from .descriptor import ModuleDescriptor


class BuildCoordinator:
    """Resolves ModuleDescriptors into ordered CompilerPassSpec sequences.

    Stateless between calls: the same descriptor and registry always yield
    the same sequence.

    Attributes:
        registry: Driver registry used for provider lookups.
        factory: Compiler pass factory used to build each spec.
    """

    def __init__(
        self,
        registry: DriverRegistry | None = None,
        factory: CompilerPassFactory | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            registry: Provider registry. Defaults to DriverRegistry.default().
            factory: Pass factory. Defaults to CompilerPassFactory().
        """
        self._registry = registry if registry is not None else DriverRegistry.default()
        self._factory = factory if factory is not None else CompilerPassFactory()

    @classmethod
    def default(cls) -> BuildCoordinator:
        """Create a coordinator over the default registry and factory."""
        return cls()

    @property
    def registry(self) -> DriverRegistry:
        return self._registry

    @property
    def factory(self) -> CompilerPassFactory:
        return self._factory

    def resolve(self, descriptor: ModuleDescriptor) -> list[CompilerPassSpec]:
        """Resolve the compiler passes for a bundle.

        Args:
            descriptor: Bundle declaration.

        Returns:
            One spec per available driver, in declared driver order.

        Raises:
            UnknownDriverError: If a declared driver has no provider.
            InvalidMappingFormatError: If a provider lacks the format's
                factory method.
        """
        if not descriptor.has_mapping:
            log_debug(
                f"BuildCoordinator: '{descriptor.identity}' has no model namespace, skipping",
                LogContext(bundle=descriptor.identity, operation="resolve"),
            )
            return []

        specs: list[CompilerPassSpec] = []
        for driver in descriptor.supported_drivers:
            context = LogContext(
                bundle=descriptor.identity,
                prefix=descriptor.prefix,
                driver=getattr(driver, "value", driver),
                mapping_format=descriptor.mapping_format.value,
                operation="resolve",
            )
            try:
                provider = self._registry.provider_for(driver)
                # provider_for only returns for registered DriverKind members
                kind = DriverKind(driver)
                spec = self._factory.build(
                    provider, descriptor.mapping_format, descriptor.context_for(kind)
                )
            except BundleMappingError as e:
                log_error(f"BuildCoordinator: {e.message}", context)
                raise

            if spec is None:
                log_debug(
                    f"BuildCoordinator: Provider '{provider.name}' unavailable, skipping",
                    context,
                )
                continue

            log_debug(
                f"BuildCoordinator: Resolved '{spec.pass_identifier}' via '{provider.name}'",
                context,
            )
            specs.append(spec)

        log_info(
            f"BuildCoordinator: Resolved {len(specs)} compiler passes for '{descriptor.identity}'",
            {"bundle": descriptor.identity, "prefix": descriptor.prefix, "passes": len(specs)},
        )
        return specs

    def build(
        self, descriptor: ModuleDescriptor, container: ContainerBuilder
    ) -> list[CompilerPassSpec]:
        """Resolve a bundle and register its passes in the container.

        Nothing is registered unless the whole resolution succeeds.

        Args:
            descriptor: Bundle declaration.
            container: Build sequence to append to.

        Returns:
            The registered specs.
        """
        specs = self.resolve(descriptor)
        container.add_compiler_passes(specs)
        return specs


__all__ = ["BuildCoordinator"]
