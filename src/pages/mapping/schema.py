"""
Schema registry and the class (composite) field.

A Schema is the ordered, named-field table governing one concrete class's
decode/encode/equals. Schemas are attached once per class at startup through an
explicit registration call and are read-only afterwards.

Responsibilities
- Build schema entries (``field``) and register them against a class
  (``register`` / ``mapped``).
- Resolve registration targets to Field instances (``to_field``).
- Decode/encode/compare object-shaped values via ``ClassField``.
- Provide nominal-then-structural equality over a registered class (``schema_equals``).

Notes
- Registration is expected to happen during single-threaded startup; the registry
  is shared read-only afterwards.
- Extra input keys not declared by a schema are ignored on decode.
- Tagged unions reserve their discriminator key on every variant class, whether
  the variant is registered before or after the union is built.
- There is no cycle detection: a self-referential schema graph recurses without bound.

Examples
    Register a class and decode it.

    >>> from dataclasses import dataclass
    >>> from pages.mapping import types
    >>> from pages.mapping.path import ROOT
    >>> @mapped(field("value", types.Number), field("label", types.String, optional=True))
    ... @dataclass(frozen=True)
    ... class Offset:
    ...     value: float
    ...     label: object
    >>> ClassField(Offset).decode({"value": 2}, ROOT).value
    2
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import MissingFieldError, SchemaDefinitionError, TypeMismatchError
from .fields import AnyField, Field
from .optional import ABSENT, Present
from .path import Path

__all__ = [
    "SchemaEntry",
    "Schema",
    "field",
    "register",
    "mapped",
    "get_schema",
    "is_registered",
    "list_schemas",
    "to_field",
    "ClassField",
    "schema_equals",
    "reserve_field",
]

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type)

# Target accepted wherever a field type is named: a Field or a registered class.
FieldTarget = Field[Any] | type


@dataclass(frozen=True)
class SchemaEntry:
    """
    One declared field of a schema.

    Attributes:
        name (str): Attribute name on the domain class and key in the JSON object.
        field (Field): Resolved codec for the value.
    """

    name: str
    field: Field[Any]

    @property
    def optional(self) -> bool:
        return self.field.optional


@dataclass(frozen=True)
class Schema:
    """
    Frozen, ordered field table for one registered class.

    Attributes:
        cls (type): The governed class.
        entries (tuple[SchemaEntry, ...]): Entries in declaration order.
    """

    cls: type
    entries: tuple[SchemaEntry, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(e.name for e in self.entries)

    def get(self, name: str) -> SchemaEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def __contains__(self, name: object) -> bool:
        return any(e.name == name for e in self.entries)

    def __iter__(self) -> Iterator[SchemaEntry]:
        return iter(self.entries)


# Registry
_SCHEMAS: dict[type, Schema] = {}

# Field names a class may not declare, with the owner that reserved each one.
_RESERVED: dict[type, dict[str, str]] = {}


def _reserved_error(cls: type, name: str, owner: str) -> SchemaDefinitionError:
    return SchemaDefinitionError(f"{cls.__qualname__}: {owner} declares reserved field: {name}")


def reserve_field(cls: type, name: str, *, owner: str) -> None:
    """
    Forbid ``cls`` from declaring an entry called ``name``.

    Applies to the schema already registered for ``cls`` and to one registered later.

    Raises:
        SchemaDefinitionError: If the registered schema of ``cls`` already declares ``name``.
    """
    schema = _SCHEMAS.get(cls)
    if schema is not None and name in schema:
        raise _reserved_error(cls, name, owner)
    _RESERVED.setdefault(cls, {}).setdefault(name, owner)


def to_field(target: FieldTarget, optional: bool = False) -> Field[Any]:
    """
    Resolve a registration target to a Field.

    Args:
        target (Field | type): An explicit Field, or a class (registered now or later).
        optional (bool): Request optional handling. A Field given here is copied with
            ``optional=True``; the original instance is never modified.

    Returns:
        Field: The resolved field.

    Raises:
        SchemaDefinitionError: If ``target`` is neither a Field nor a class.
    """
    if isinstance(target, Field):
        return target.with_optional(True) if optional else target
    if isinstance(target, type):
        return ClassField(target, optional=optional)
    raise SchemaDefinitionError(f"cannot resolve a field from: {target!r}")


def field(name: str, type: FieldTarget | None = None, *, optional: bool = False) -> SchemaEntry:
    """
    Declare one schema entry.

    Args:
        name (str): Attribute/key name.
        type (Field | type | None): Codec or nested class. Defaults to pass-through.
        optional (bool): Whether absence in the input is valid.

    Returns:
        SchemaEntry: Entry to pass to ``register``/``mapped``.
    """
    if type is None:
        return SchemaEntry(name, AnyField(optional=optional))
    return SchemaEntry(name, to_field(type, optional))


def register(cls: C, *entries: SchemaEntry) -> C:
    """
    Attach a schema to ``cls``. Call once per class during startup.

    Args:
        cls (type): Class constructed as ``cls(**values)`` on decode/clone.
        *entries (SchemaEntry): Declared fields, in order.

    Returns:
        type: ``cls`` unchanged, so this can back a decorator.

    Raises:
        SchemaDefinitionError: If ``cls`` is already registered, two entries share a name,
            or an entry uses a name reserved through ``reserve_field``.
    """
    if cls in _SCHEMAS:
        raise SchemaDefinitionError(f"{cls.__qualname__}: schema already registered")
    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen:
            raise SchemaDefinitionError(f"{cls.__qualname__}: duplicate field: {entry.name}")
        owner = _RESERVED.get(cls, {}).get(entry.name)
        if owner is not None:
            raise _reserved_error(cls, entry.name, owner)
        seen.add(entry.name)
    _SCHEMAS[cls] = Schema(cls, tuple(entries))
    logger.debug("Registered schema: %s (%d fields)", cls.__qualname__, len(entries))
    return cls


def mapped(*entries: SchemaEntry) -> Callable[[C], C]:
    """Class decorator form of ``register``."""

    def decorate(cls: C) -> C:
        return register(cls, *entries)

    return decorate


def get_schema(cls: type) -> Schema:
    """
    Look up the schema registered for ``cls``.

    Raises:
        SchemaDefinitionError: If ``cls`` has no registered schema.
    """
    try:
        return _SCHEMAS[cls]
    except KeyError:
        raise SchemaDefinitionError(f"{cls.__qualname__}: no schema registered") from None


def is_registered(cls: type) -> bool:
    return cls in _SCHEMAS


def list_schemas() -> list[Schema]:
    """Return all registered schemas in registration order."""
    return list(_SCHEMAS.values())


def _entry_equals(entry: SchemaEntry, a: Any, b: Any) -> bool:
    if not entry.optional:
        return entry.field.equals(a, b)
    a_present = isinstance(a, Present)
    b_present = isinstance(b, Present)
    if a_present and b_present:
        return entry.field.equals(a.value, b.value)
    return not a_present and not b_present


def schema_equals(a: Any, b: Any) -> bool:
    """
    Nominal-then-structural equality over registered classes.

    Returns False unless ``a`` and ``b`` share the identical concrete class; then
    compares every declared field with that field's own ``equals``.
    """
    if a is None or b is None:
        return a is b
    if type(a) is not type(b):
        return False
    schema = get_schema(type(a))
    return all(_entry_equals(e, getattr(a, e.name), getattr(b, e.name)) for e in schema)


@dataclass(frozen=True)
class ClassField(Field[Any]):
    """
    Composite codec for a registered class.

    Attributes:
        cls (type): Target class; its schema is looked up at call time.
    """

    cls: type

    @property
    def schema(self) -> Schema:
        return get_schema(self.cls)

    def decode(self, raw: Any, path: Path) -> Any:
        if not isinstance(raw, Mapping):
            raise path.error(f"expected object, got: {raw!r}", TypeMismatchError)
        values: dict[str, Any] = {}
        for entry in self.schema:
            value = raw.get(entry.name)
            if value is None:
                if not entry.optional:
                    raise path.extend(entry.name).error("missing value", MissingFieldError)
                values[entry.name] = ABSENT
                continue
            decoded = entry.field.decode(value, path.extend(entry.name))
            values[entry.name] = Present(decoded) if entry.optional else decoded
        return self.cls(**values)

    def encode(self, value: Any, path: Path) -> Any:
        out: dict[str, Any] = {}
        for entry in self.schema:
            current = getattr(value, entry.name)
            child = path.extend(entry.name)
            if not entry.optional:
                out[entry.name] = entry.field.encode(current, child)
            elif isinstance(current, Present):
                out[entry.name] = entry.field.encode(current.value, child)
            elif current is not ABSENT and current is not None:
                raise child.error(f"expected optional value, got: {current!r}", TypeMismatchError)
        return out

    def equals(self, a: Any, b: Any) -> bool:
        return schema_equals(a, b)
