"""Error classes for bundle-mapping.

All errors raised while resolving a bundle's mapping compiler passes derive
from BundleMappingError, so a build tool can stop on a single base class.

Resolution has two hard failures:
- UnknownDriverError: a declared driver has no registered provider
- InvalidMappingFormatError: the provider has no factory method for the format

A provider whose optional integration is not installed is NOT an error; the
coordinator skips it.

Example:
    >>> from bundle_mapping.exceptions import UnknownDriverError
    >>>
    >>> try:
    ...     registry.provider_for("doctrine/couchdb-odm")
    ... except UnknownDriverError as e:
    ...     print(e.driver)
    doctrine/couchdb-odm
"""

from __future__ import annotations

from typing import Any


class BundleMappingError(Exception):
    """Base class for all bundle-mapping errors.

    Attributes:
        message: Human-readable error message
        metadata: Additional error context
    """

    def __init__(
        self,
        message: str,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Error message
            metadata: Additional context
        """
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for build reports.

        Returns:
            Dictionary with error details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "metadata": self.metadata,
        }


class ConfigurationError(BundleMappingError):
    """Bundle declaration is invalid.

    Raised while parsing declarations, before any resolution happens:
    - Unrecognized mapping format string
    - Duplicate supported drivers
    - Malformed declaration file

    Example:
        >>> raise ConfigurationError("Bundle declaration is missing 'identity'")
    """

    pass


class UnknownDriverError(BundleMappingError):
    """A declared driver has no registered compiler-pass provider.

    This is a programming error (a driver added without updating the
    registry, or a typo in a declaration) and aborts the whole build.
    """

    def __init__(self, driver: Any, *, metadata: dict[str, Any] | None = None) -> None:
        self.driver = getattr(driver, "value", str(driver))
        super().__init__(
            f'Unknown driver "{self.driver}".',
            metadata={"driver": self.driver, **(metadata or {})},
        )


class InvalidMappingFormatError(ConfigurationError):
    """The provider exposes no factory method for the mapping format.

    The provider is known, so this is a configuration error rather than a
    missing optional dependency.

    Attributes:
        mapping_format: The offending format value
        provider: Name of the provider that rejected it, if known
    """

    def __init__(
        self,
        mapping_format: Any,
        provider: str | None = None,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self.mapping_format = getattr(mapping_format, "value", str(mapping_format))
        self.provider = provider
        message = (
            "The 'mappingFormat' value is invalid, must be 'xml', 'yml' or 'annotation'"
            f" (got '{self.mapping_format}')."
        )
        context: dict[str, Any] = {"mapping_format": self.mapping_format}
        if provider is not None:
            context["provider"] = provider
        super().__init__(message, metadata={**context, **(metadata or {})})


__all__ = [
    "BundleMappingError",
    "ConfigurationError",
    "UnknownDriverError",
    "InvalidMappingFormatError",
]
