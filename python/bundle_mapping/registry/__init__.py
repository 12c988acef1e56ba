"""Compiler-pass provider registry.

Maps each driver kind to the provider that builds its mapping compiler
pass. The set of drivers is closed; an undeclared driver surfaces as
UnknownDriverError at lookup time.

    from bundle_mapping.registry import DriverRegistry, ProviderRef

    registry = DriverRegistry.default()
    registry.provider_for("doctrine/orm").name  # 'DoctrineOrmMappingsPass'

Optional integrations:
A provider marked unavailable stays in the registry. The coordinator skips
it instead of failing, so a bundle may declare drivers the current build
does not install.
"""

from __future__ import annotations

from .driver_registry import DEFAULT_PROVIDERS, DriverRegistry
from .provider import ProviderRef

__all__ = [
    "DEFAULT_PROVIDERS",
    "DriverRegistry",
    "ProviderRef",
]
