"""Container build sequence.

ContainerBuilder collects the compiler passes a build registers, in order.
Pass identifiers are globally unique: registering a second pass with an
identifier already present is a configuration error.

Example:
    >>> container = ContainerBuilder()
    >>> AttributeBundle().build(container)
    >>> [p.pass_identifier for p in container.compiler_passes]
    ['attribute.driver.doctrine/orm']
"""

from __future__ import annotations

from collections.abc import Iterable

from .exceptions import ConfigurationError
from .types import CompilerPassSpec


class ContainerBuilder:
    """Ordered, append-only sequence of compiler-pass registrations."""

    def __init__(self) -> None:
        self._passes: list[CompilerPassSpec] = []
        self._identifiers: set[str] = set()

    @property
    def compiler_passes(self) -> tuple[CompilerPassSpec, ...]:
        """Registered passes in registration order."""
        return tuple(self._passes)

    def add_compiler_pass(self, spec: CompilerPassSpec) -> ContainerBuilder:
        """Append one compiler pass.

        Args:
            spec: Pass to register.

        Returns:
            Self for method chaining.

        Raises:
            ConfigurationError: If the pass identifier is already registered.
        """
        return self.add_compiler_passes([spec])

    def add_compiler_passes(self, specs: Iterable[CompilerPassSpec]) -> ContainerBuilder:
        """Append several compiler passes, all or nothing.

        Args:
            specs: Passes to register, in order.

        Returns:
            Self for method chaining.

        Raises:
            ConfigurationError: If any identifier is already registered or
                repeated within specs. Nothing is appended in that case.
        """
        pending = list(specs)
        seen = set(self._identifiers)
        for spec in pending:
            if spec.pass_identifier in seen:
                raise ConfigurationError(
                    f"Compiler pass '{spec.pass_identifier}' is already registered.",
                    metadata={"pass_identifier": spec.pass_identifier},
                )
            seen.add(spec.pass_identifier)

        self._passes.extend(pending)
        self._identifiers = seen
        return self

    def has_compiler_pass(self, pass_identifier: str) -> bool:
        return pass_identifier in self._identifiers

    def __len__(self) -> int:
        return len(self._passes)


__all__ = ["ContainerBuilder"]
