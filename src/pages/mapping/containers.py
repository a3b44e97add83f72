"""
Collection fields built atop any inner field.

- ``ArrayField``: JSON arrays <-> lists, each element at ``path[i]``; order is significant.
- ``MapField``: string-keyed JSON objects <-> dicts, the inner field applied to every
  value under its key; the key set is preserved, key order is not significant.

Notes
- The inner field's ``optional`` flag is not consulted; a null element is passed to the
  inner decode like any other value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import TypeMismatchError
from .fields import Field
from .path import Path

__all__ = [
    "ArrayField",
    "MapField",
]

T = TypeVar("T")
V = TypeVar("V")


@dataclass(frozen=True)
class ArrayField(Field[list[T]], Generic[T]):
    """
    Homogeneous array of values governed by ``field``.

    Attributes:
        field (Field): Codec applied to every element.
    """

    field: Field[T]

    def decode(self, raw: Any, path: Path) -> list[T]:
        if not isinstance(raw, (list, tuple)):
            raise path.error(f"expected array, got: {raw!r}", TypeMismatchError)
        return [self.field.decode(v, path.index(i)) for i, v in enumerate(raw)]

    def encode(self, value: list[T], path: Path) -> Any:
        return [self.field.encode(v, path.index(i)) for i, v in enumerate(value)]

    def equals(self, a: list[T], b: list[T]) -> bool:
        if len(a) != len(b):
            return False
        return all(self.field.equals(x, y) for x, y in zip(a, b))


@dataclass(frozen=True)
class MapField(Field[dict[str, V]], Generic[V]):
    """
    String-keyed map of values governed by ``field``.

    Attributes:
        field (Field): Codec applied to every value.
    """

    field: Field[V]

    def decode(self, raw: Any, path: Path) -> dict[str, V]:
        if not isinstance(raw, Mapping):
            raise path.error(f"expected object, got: {raw!r}", TypeMismatchError)
        out: dict[str, V] = {}
        for key, v in raw.items():
            if not isinstance(key, str):
                raise path.error(f"expected string key, got: {key!r}", TypeMismatchError)
            out[key] = self.field.decode(v, path.extend(key))
        return out

    def encode(self, value: dict[str, V], path: Path) -> Any:
        return {key: self.field.encode(v, path.extend(key)) for key, v in value.items()}

    def equals(self, a: dict[str, V], b: dict[str, V]) -> bool:
        if a.keys() != b.keys():
            return False
        return all(self.field.equals(v, b[key]) for key, v in a.items())
