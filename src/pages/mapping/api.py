"""
Top-level mapping operations: decode, encode, equals, clone, mutate.

Each decode/encode call creates a root Path and recurses depth-first through
the resolved field. ``equals``/``clone``/``mutate`` work on already-decoded
instances through the schema registry and carry no path tracking; their
failures are programmer-contract violations.

Examples:
    >>> from dataclasses import dataclass
    >>> from enum import Enum
    >>> from pages.mapping import field, mapped, types
    >>> class Unit(str, Enum):
    ...     DAYS = "days"
    ...     WEEKS = "weeks"
    >>> @mapped(field("value", types.Number), field("unit", types.Enum(Unit)))
    ... @dataclass(frozen=True)
    ... class Duration:
    ...     value: float
    ...     unit: Unit
    >>> d = decode({"value": 2, "unit": "days"}, Duration)
    >>> encode(d)
    {'value': 2, 'unit': 'days'}
    >>> clone(d, {"value": 3}).value
    3
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import MappingError, UnregisteredOverrideKeyError
from .path import ROOT
from .schema import FieldTarget, Schema, get_schema, schema_equals, to_field

__all__ = [
    "decode",
    "encode",
    "equals",
    "clone",
    "mutate",
    "try_decode",
    "DecodeResult",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decode(raw: Any, schema: FieldTarget) -> Any:
    """
    Decode a JSON-like tree under ``schema`` (a Field or a registered class).

    Raises:
        MappingError: On the first shape violation, with its full access path.
    """
    return to_field(schema).decode(raw, ROOT)


def encode(value: Any, schema: FieldTarget | None = None) -> Any:
    """
    Encode ``value`` to a JSON-compatible tree.

    Args:
        value: Domain value.
        schema: Field or class to encode with; defaults to ``type(value)``.
    """
    target = schema if schema is not None else type(value)
    return to_field(target).encode(value, ROOT)


def equals(a: Any, b: Any) -> bool:
    """Nominal-then-structural equality; see ``schema_equals``."""
    return schema_equals(a, b)


def _check_overrides(schema: Schema, overrides: Mapping[str, Any]) -> None:
    for key in overrides:
        if key not in schema:
            raise ROOT.extend(key).error(
                f"field does not exist on {schema.cls.__qualname__}",
                UnregisteredOverrideKeyError,
            )


def clone(value: T, overrides: Mapping[str, Any] | None = None) -> T:
    """
    Build a new instance of ``type(value)`` from its declared fields plus overrides.

    Args:
        value: Instance of a registered class.
        overrides: Declared field name -> new (already decoded) value.

    Returns:
        A new instance; ``value`` is untouched.

    Raises:
        UnregisteredOverrideKeyError: If an override key is not declared.
    """
    schema = get_schema(type(value))
    values = {name: getattr(value, name) for name in schema.names}
    if overrides:
        _check_overrides(schema, overrides)
        values.update(overrides)
    return schema.cls(**values)


def mutate(value: T, overrides: Mapping[str, Any]) -> T:
    """
    Write overrides into ``value`` in place and return it.

    This bypasses frozen-dataclass protection; prefer ``clone`` unless aliasing
    the existing instance is intended.

    Raises:
        UnregisteredOverrideKeyError: If an override key is not declared. Nothing
            is written in that case.
    """
    schema = get_schema(type(value))
    _check_overrides(schema, overrides)
    for key, v in overrides.items():
        object.__setattr__(value, key, v)
    return value


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """
    Outcome of ``try_decode``.

    Attributes:
        ok (bool): Whether decoding succeeded.
        value (Any): Decoded value when ``ok``; None otherwise.
        error (MappingError | None): Path-qualified failure when not ``ok``.
    """

    ok: bool
    value: T | None = None
    error: MappingError | None = None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def try_decode(raw: Any, schema: FieldTarget) -> DecodeResult[Any]:
    """
    Decode without raising ``MappingError``; the failure is returned instead.

    Notes:
        ``SchemaDefinitionError`` still propagates; it signals a programming error.
    """
    try:
        return DecodeResult(ok=True, value=decode(raw, schema))
    except MappingError as exc:
        logger.debug("Decode failed: %s", exc)
        return DecodeResult(ok=False, error=exc)
