"""
pages.mapping: declarative object-mapping engine.

## Responsibilities
- Decode loosely-typed JSON-like trees into registered domain classes.
- Encode domain values back to JSON-compatible trees.
- Compare values nominally, then structurally; produce modified copies.
- Dispatch closed tagged unions by the reserved ``type`` discriminator.

## Public API
- Registration: ``field``, ``register``, ``mapped``, ``types``.
- Operations: ``decode``, ``encode``, ``equals``, ``clone``, ``mutate``, ``try_decode``.
- Optional values: ``Present``, ``ABSENT``, ``present``, ``absent``.
- Errors: ``MappingError`` and its kinds; ``SchemaDefinitionError``.

## Notes
- Zero-IO; fully synchronous. Registries are built at import time and read-only afterwards.
- Extra input keys are ignored. Moment fields never compare equal (see ``fields.MomentField``).

## Examples
```python
from dataclasses import dataclass
from pages.mapping import decode, encode, field, mapped, types

@mapped(field("id", types.String), field("title", types.String))
@dataclass(frozen=True)
class Entry:
    id: str
    title: str

entry = decode({"id": "c1", "title": "Load"}, Entry)
encode(entry)  # {'id': 'c1', 'title': 'Load'}
```
"""

from __future__ import annotations

from . import types
from .api import DecodeResult, clone, decode, encode, equals, mutate, try_decode
from .containers import ArrayField, MapField
from .errors import (
    MappingError,
    MissingFieldError,
    MissingVariantTagError,
    SchemaDefinitionError,
    TypeMismatchError,
    UnknownVariantTagError,
    UnregisteredOverrideKeyError,
)
from .fields import AnyField, BooleanField, EnumField, Field, MomentField, NumberField, StringField
from .optional import ABSENT, Absent, Option, Present, absent, present
from .path import ROOT, Path
from .schema import (
    ClassField,
    Schema,
    SchemaEntry,
    field,
    get_schema,
    is_registered,
    list_schemas,
    mapped,
    register,
)
from .union import TYPE_KEY, TypeField

__all__ = [
    "types",
    # operations
    "decode",
    "encode",
    "equals",
    "clone",
    "mutate",
    "try_decode",
    "DecodeResult",
    # registration
    "field",
    "register",
    "mapped",
    "get_schema",
    "is_registered",
    "list_schemas",
    "Schema",
    "SchemaEntry",
    # fields
    "Field",
    "AnyField",
    "NumberField",
    "StringField",
    "BooleanField",
    "EnumField",
    "MomentField",
    "ArrayField",
    "MapField",
    "ClassField",
    "TypeField",
    "TYPE_KEY",
    # optional
    "Option",
    "Present",
    "Absent",
    "ABSENT",
    "present",
    "absent",
    # paths / errors
    "Path",
    "ROOT",
    "MappingError",
    "MissingFieldError",
    "TypeMismatchError",
    "MissingVariantTagError",
    "UnknownVariantTagError",
    "UnregisteredOverrideKeyError",
    "SchemaDefinitionError",
]
