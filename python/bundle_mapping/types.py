"""Pydantic models and enums for bundle-mapping.

Driver kinds and mapping formats are closed enumerations; their values are
the tokens used in bundle declarations (``doctrine/orm``, ``xml``, ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .exceptions import ConfigurationError


class DriverKind(str, Enum):
    """Persistence backend families a bundle can support."""

    RELATIONAL_ORM = "doctrine/orm"
    """Relational object-relational mapper."""

    DOCUMENT_STORE = "doctrine/mongodb-odm"
    """Document store object-document mapper."""

    CONTENT_REPOSITORY = "doctrine/phpcr-odm"
    """Content repository object-document mapper."""

    @classmethod
    def coerce(cls, value: DriverKind | str) -> DriverKind | str:
        """Convert a driver token to a DriverKind when it names one.

        Unrecognized tokens are returned unchanged so the registry can
        report them as unknown drivers during resolution.

        Example:
            >>> DriverKind.coerce("doctrine/orm")
            <DriverKind.RELATIONAL_ORM: 'doctrine/orm'>
            >>> DriverKind.coerce("unknown-driver")
            'unknown-driver'
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


class MappingFormat(str, Enum):
    """Authoring format of the persistence mapping metadata."""

    XML = "xml"
    YAML = "yml"
    ANNOTATION = "annotation"

    @classmethod
    def parse(cls, value: MappingFormat | str) -> MappingFormat:
        """Parse a configured format value.

        Matching is case-insensitive and ``yaml`` is accepted for ``yml``.

        Raises:
            ConfigurationError: If the value is not a known format.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "yaml":
            normalized = cls.YAML.value
        try:
            return cls(normalized)
        except ValueError:
            raise ConfigurationError(
                f"Unknown mapping format '{value}', must be 'xml', 'yml' or 'annotation'.",
                metadata={"mapping_format": str(value)},
            ) from None

    @property
    def factory_method_name(self) -> str:
        """Name of the provider factory method for this format.

        Example:
            >>> MappingFormat.XML.factory_method_name
            'createXmlMappingDriver'
        """
        return f"create{self.value.capitalize()}MappingDriver"


class CompilerPassSpec(BaseModel):
    """A resolved mapping compiler-pass registration.

    Produced by the CompilerPassFactory and handed verbatim to the container
    build sequence.

    Example:
        >>> spec.pass_identifier
        'attribute.driver.doctrine/orm'
        >>> spec.factory_method_name
        'createXmlMappingDriver'
    """

    driver_kind: DriverKind = Field(description="Backend the pass configures.")
    provider_name: str = Field(description="Compiler-pass provider reference.")
    factory_method_name: str = Field(
        description="Provider factory method the container invokes.",
    )
    arguments: list[Any] = Field(
        default_factory=list,
        description="Positional arguments for the factory method.",
    )
    pass_identifier: str = Field(
        description="Globally unique identifier '{prefix}.driver.{driver}'.",
    )

    model_config = {"frozen": True}


class LogContext(BaseModel):
    """Structured logging context for resolution log lines.

    Example:
        >>> context = LogContext(bundle="AttributeBundle", operation="resolve")
        >>> log_info("Resolving bundle", context)
    """

    bundle: str | None = Field(
        default=None,
        description="Bundle identity being resolved.",
    )
    prefix: str | None = Field(
        default=None,
        description="Derived bundle prefix.",
    )
    driver: str | None = Field(
        default=None,
        description="Driver being resolved.",
    )
    mapping_format: str | None = Field(
        default=None,
        description="Declared mapping format.",
    )
    operation: str | None = Field(
        default=None,
        description="Operation name for tracing.",
    )

    model_config = {"extra": "allow"}


__all__ = [
    "DriverKind",
    "MappingFormat",
    "CompilerPassSpec",
    "LogContext",
]
