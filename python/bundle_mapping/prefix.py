"""Bundle prefix derivation.

The prefix namespaces every generated name for a bundle: the object manager
parameter (``{prefix}.object_manager``) and each compiler pass identifier
(``{prefix}.driver.{driver}``).

Example:
    >>> PrefixResolver.resolve("AttributeBundle")
    'attribute'
    >>> PrefixResolver.resolve("Sylius\\Bundle\\TaxonomyBundle\\SyliusTaxonomyBundle")
    'sylius_taxonomy'
"""

from __future__ import annotations

import re

BUNDLE_SUFFIX = "Bundle"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase token to lowercase underscore form.

    Example:
        >>> underscore("SyliusTaxonomy")
        'sylius_taxonomy'
        >>> underscore("HTTPCache")
        'http_cache'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


class PrefixResolver:
    """Derives a bundle prefix from its identity.

    The identity is a bundle type name, optionally qualified with a
    namespace (``\\`` separated) or module path (``.`` separated). Callers
    must supply names ending in ``Bundle``; a name without the suffix is
    converted as-is.
    """

    @staticmethod
    def resolve(identity: str | type) -> str:
        """Return the lowercase underscore prefix for a bundle identity.

        Args:
            identity: Bundle type name or the bundle class itself.

        Returns:
            Prefix such as ``attribute`` for ``AttributeBundle``.
        """
        name = PrefixResolver.short_name(identity)
        if name.endswith(BUNDLE_SUFFIX):
            name = name[: -len(BUNDLE_SUFFIX)]
        return underscore(name)

    @staticmethod
    def short_name(identity: str | type) -> str:
        """Strip any namespace or module path from the identity."""
        if isinstance(identity, type):
            return identity.__name__
        return re.split(r"[\\.]", identity)[-1]


__all__ = [
    "BUNDLE_SUFFIX",
    "PrefixResolver",
    "underscore",
]
