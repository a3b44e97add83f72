"""
Tagged-union field: closed-set polymorphic dispatch over the ``type`` discriminator.

Each variant is a registered class carrying its tag as data (a ``type`` class
attribute). Decode reads ``raw["type"]`` and hands the whole object to the
matched variant's class field; encode resolves the tag from the value and
injects ``"type": tag`` into the variant's output.

Notes
- The ``type`` key is reserved: a variant schema may not declare it.
- Duplicate tags are rejected when the field is built, never per call.

Examples
    >>> from dataclasses import dataclass
    >>> from typing import ClassVar
    >>> from pages.mapping import types
    >>> from pages.mapping.path import ROOT
    >>> from pages.mapping.schema import field, mapped
    >>> @mapped(field("query", types.String))
    ... @dataclass(frozen=True)
    ... class Embedded:
    ...     type: ClassVar[str] = "embedded"
    ...     query: str
    >>> union = TypeField.of([Embedded])
    >>> union.encode(union.decode({"type": "embedded", "query": "q"}, ROOT), ROOT)
    {'query': 'q', 'type': 'embedded'}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .errors import (
    MissingVariantTagError,
    SchemaDefinitionError,
    TypeMismatchError,
    UnknownVariantTagError,
)
from .fields import Field
from .path import Path
from .schema import ClassField, FieldTarget, reserve_field, schema_equals, to_field

__all__ = [
    "TYPE_KEY",
    "TypeField",
    "tag_of",
]

logger = logging.getLogger(__name__)

TYPE_KEY = "type"


def tag_of(value: Any) -> str | None:
    """Read the discriminator stored on a variant (its ``type`` attribute), or None."""
    return getattr(value, TYPE_KEY, None)


def _check_reserved(tag: str, target: Field[Any]) -> None:
    if isinstance(target, ClassField):
        reserve_field(target.cls, TYPE_KEY, owner=f"variant '{tag}'")


@dataclass(frozen=True, init=False)
class TypeField(Field[Any]):
    """
    Dispatch to one of several variant fields by discriminator tag.

    Attributes:
        type_function (Callable[[Any], str]): Maps a live value to its tag.
        variants (Mapping[str, Field]): Read-only tag -> variant field table,
            in registration order.
    """

    type_function: Callable[[Any], str]
    variants: Mapping[str, Field[Any]]

    def __init__(
        self,
        type_function: Callable[[Any], str],
        variants: Iterable[tuple[str, FieldTarget]] | Mapping[str, FieldTarget],
        *,
        optional: bool = False,
    ) -> None:
        table: dict[str, Field[Any]] = {}
        pairs = variants.items() if isinstance(variants, Mapping) else variants
        for tag, target in pairs:
            if tag in table:
                raise SchemaDefinitionError(f"duplicate variant tag: {tag}")
            resolved = to_field(target)
            _check_reserved(tag, resolved)
            table[tag] = resolved
        object.__setattr__(self, "type_function", type_function)
        object.__setattr__(self, "variants", MappingProxyType(table))
        object.__setattr__(self, "optional", optional)
        logger.debug("Built tagged union: %s", ", ".join(table))

    @classmethod
    def of(cls, classes: Sequence[type], *, optional: bool = False) -> TypeField:
        """
        Build a union from variant classes that carry their tag as a ``type`` attribute.

        Raises:
            SchemaDefinitionError: If a class has no string ``type`` attribute, or tags repeat.
        """
        pairs: list[tuple[str, FieldTarget]] = []
        for variant in classes:
            tag = getattr(variant, TYPE_KEY, None)
            if not isinstance(tag, str):
                raise SchemaDefinitionError(
                    f"{variant.__qualname__}: variant has no string '{TYPE_KEY}' attribute"
                )
            pairs.append((tag, variant))
        return cls(tag_of, pairs, optional=optional)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self.variants)

    def _expected(self) -> str:
        return ", ".join(self.variants)

    def decode(self, raw: Any, path: Path) -> Any:
        if not isinstance(raw, Mapping):
            raise path.error(f"expected object, got: {raw!r}", TypeMismatchError)
        tag = raw.get(TYPE_KEY)
        if tag is None:
            raise path.error(f"missing field: {TYPE_KEY}", MissingVariantTagError)
        sub = self.variants.get(tag) if isinstance(tag, str) else None
        if sub is None:
            raise path.error(
                f"does not correspond to a sub-type: {tag}, expected one of: {self._expected()}",
                UnknownVariantTagError,
                tag=tag,
                expected=self.tags,
            )
        return sub.decode(raw, path)

    def encode(self, value: Any, path: Path) -> Any:
        tag = self.type_function(value)
        sub = self.variants.get(tag) if isinstance(tag, str) else None
        if sub is None:
            raise path.error(
                f"does not correspond to a sub-type: {tag}, expected one of: {self._expected()}",
                UnknownVariantTagError,
                tag=tag,
                expected=self.tags,
            )
        out = sub.encode(value, path)
        out[TYPE_KEY] = tag
        return out

    def equals(self, a: Any, b: Any) -> bool:
        return schema_equals(a, b)
