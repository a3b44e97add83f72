"""
Exception types raised by the mapping engine.

Provides typed exceptions for decode/encode failures and schema definition mistakes:
- MappingError for input-contract violations found while walking a value tree.
  Every instance carries the formatted access path (e.g. ``object.components[2].title``).
- SchemaDefinitionError for programmer errors detected while schemas and tagged
  unions are being registered at startup.

Notes:
    - Errors are fail-fast: the first failure aborts the whole decode/encode call.
    - Instances are built by ``pages.mapping.path.Path.error``; callers rarely
      construct them directly.

Examples:
    Catch a missing field.

    >>> from pages.mapping.errors import MissingFieldError
    >>> err = MissingFieldError("object.title", "missing value")
    >>> str(err)
    'object.title: missing value'
    >>> err.path
    'object.title'
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "MappingError",
    "MissingFieldError",
    "TypeMismatchError",
    "MissingVariantTagError",
    "UnknownVariantTagError",
    "UnregisteredOverrideKeyError",
    "SchemaDefinitionError",
]


class MappingError(ValueError):
    """
    Base class for path-qualified decode/encode/override failures.

    Attributes:
        path (str): Formatted access path at the point of failure.
        message (str): Human-readable description without the path prefix.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class MissingFieldError(MappingError):
    """Required field absent or null during class-field decode."""


class TypeMismatchError(MappingError):
    """Raw value shape does not match the expected type."""


class MissingVariantTagError(MappingError):
    """Tagged-union input lacks the ``type`` discriminator."""


class UnknownVariantTagError(MappingError):
    """
    Discriminator value has no registered variant.

    Attributes:
        tag (str | None): The offending discriminator value.
        expected (tuple[str, ...]): Registered tags, in registration order.
    """

    def __init__(
        self,
        path: str,
        message: str,
        *,
        tag: str | None = None,
        expected: Sequence[str] = (),
    ) -> None:
        super().__init__(path, message)
        self.tag = tag
        self.expected = tuple(expected)


class UnregisteredOverrideKeyError(MappingError):
    """``clone``/``mutate`` override references a field the schema does not declare."""


class SchemaDefinitionError(RuntimeError):
    """Schema or tagged-union registration is inconsistent (duplicate, reserved, unregistered)."""
