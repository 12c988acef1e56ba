"""Driver registry: driver kind → compiler-pass provider.

The registry is a fixed table built once before any resolution and never
mutated afterwards. Deriving a registry with different availability returns
a new instance.

Default table:
- doctrine/orm         → DoctrineOrmMappingsPass
- doctrine/mongodb-odm → DoctrineMongoDBMappingsPass
- doctrine/phpcr-odm   → DoctrinePhpcrMappingsPass

Usage:
    # Every default provider available
    registry = DriverRegistry.default()

    # Only the ORM integration is installed
    registry = DriverRegistry.default(installed=[DriverKind.RELATIONAL_ORM])

    provider = registry.provider_for("doctrine/orm")
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from ..exceptions import ConfigurationError, UnknownDriverError
from ..types import DriverKind
from .provider import ProviderRef

DEFAULT_PROVIDERS: Mapping[DriverKind, ProviderRef] = MappingProxyType(
    {
        DriverKind.RELATIONAL_ORM: ProviderRef(name="DoctrineOrmMappingsPass"),
        DriverKind.DOCUMENT_STORE: ProviderRef(name="DoctrineMongoDBMappingsPass"),
        DriverKind.CONTENT_REPOSITORY: ProviderRef(name="DoctrinePhpcrMappingsPass"),
    }
)


class DriverRegistry:
    """Read-only lookup table of compiler-pass providers.

    Attributes:
        kinds: Registered driver kinds in registration order.
    """

    def __init__(self, providers: Mapping[DriverKind, ProviderRef]) -> None:
        """Initialize the registry.

        Args:
            providers: Provider for each supported driver kind.
        """
        self._providers: Mapping[DriverKind, ProviderRef] = MappingProxyType(dict(providers))

    @classmethod
    def default(cls, installed: Iterable[DriverKind | str] | None = None) -> DriverRegistry:
        """Create the registry with the default providers.

        Args:
            installed: Driver kinds whose integration is installed. None
                marks every default provider available.

        Returns:
            Registry over DEFAULT_PROVIDERS.

        Raises:
            ConfigurationError: If installed names an unknown driver.
        """
        registry = cls(DEFAULT_PROVIDERS)
        if installed is None:
            return registry
        return registry.with_installed(installed)

    def with_installed(self, installed: Iterable[DriverKind | str]) -> DriverRegistry:
        """Return a registry where only the given kinds are available."""
        kinds: set[DriverKind] = set()
        for driver in installed:
            kind = DriverKind.coerce(driver)
            if not isinstance(kind, DriverKind):
                raise ConfigurationError(
                    f"Unknown installed driver '{driver}'.",
                    metadata={"driver": str(driver)},
                )
            kinds.add(kind)

        return DriverRegistry(
            {
                kind: provider.with_availability(kind in kinds)
                for kind, provider in self._providers.items()
            }
        )

    def probed(self) -> DriverRegistry:
        """Return a registry whose providers' availability was import-probed."""
        return DriverRegistry({kind: provider.probe() for kind, provider in self._providers.items()})

    def provider_for(self, kind: DriverKind | str) -> ProviderRef:
        """Look up the provider for a driver.

        Args:
            kind: Driver kind or driver token.

        Returns:
            The registered provider (available or not).

        Raises:
            UnknownDriverError: If no provider is registered for the driver.
        """
        driver = DriverKind.coerce(kind)
        if not isinstance(driver, DriverKind) or driver not in self._providers:
            raise UnknownDriverError(kind)
        return self._providers[driver]

    @property
    def kinds(self) -> list[DriverKind]:
        return list(self._providers)

    def providers(self) -> Mapping[DriverKind, ProviderRef]:
        return self._providers

    def registry_info(self) -> list[dict[str, Any]]:
        """Get registry info for debugging.

        Returns:
            List of provider info dicts.
        """
        return [
            {
                "driver": kind.value,
                "provider": provider.name,
                "available": provider.available,
                "factory_methods": provider.factory_methods(),
            }
            for kind, provider in self._providers.items()
        ]

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, (DriverKind, str)):
            return False
        return DriverKind.coerce(kind) in self._providers

    def __iter__(self) -> Iterator[DriverKind]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


__all__ = [
    "DEFAULT_PROVIDERS",
    "DriverRegistry",
]
