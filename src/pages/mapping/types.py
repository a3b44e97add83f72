"""
Registration vocabulary for schema entries.

Shared, frozen field instances for scalars and small factories for composite
fields, so domain schemas read as ``field("gap", types.Number)`` or
``field("components", types.Array(Component))``.

Examples:
    >>> from pages.mapping import types
    >>> from pages.mapping.path import ROOT
    >>> types.Map(types.String).decode({"team": "core"}, ROOT)
    {'team': 'core'}
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum as _Enum
from typing import Any as _Any

from .containers import ArrayField, MapField
from .fields import AnyField, BooleanField, EnumField, MomentField, NumberField, StringField
from .schema import FieldTarget, to_field
from .union import TypeField

__all__ = [
    "Any",
    "Number",
    "String",
    "Boolean",
    "Moment",
    "Enum",
    "Array",
    "Map",
    "SubTypes",
]

Any = AnyField()
Number = NumberField()
String = StringField()
Boolean = BooleanField()
Moment = MomentField()


def Enum(enum: type[_Enum]) -> EnumField[_Any]:
    return EnumField(enum)


def Array(inner: FieldTarget) -> ArrayField[_Any]:
    """Array of ``inner`` (a Field or a registered class)."""
    return ArrayField(to_field(inner))


def Map(inner: FieldTarget) -> MapField[_Any]:
    """String-keyed map of ``inner`` (a Field or a registered class)."""
    return MapField(to_field(inner))


def SubTypes(classes: Sequence[type]) -> TypeField:
    """Tagged union over variant classes carrying a ``type`` tag attribute."""
    return TypeField.of(classes)
