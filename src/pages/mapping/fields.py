"""
Field contract and primitive (scalar) fields.

A Field is a frozen codec + structural comparator for one value type, plus an
``optional`` flag read by the owning composite (see ``pages.mapping.schema``).

Responsibilities
- Define the ``Field`` contract: ``decode``, ``encode``, ``equals``, ``optional``.
- Provide scalar fields for JSON leaves: number, string, boolean, pass-through.
- Provide an enum field (member values on the wire) and an epoch-millisecond
  moment field.

Notes
- Scalar decode/encode is the identity transform on the matching JSON type;
  a mismatching shape raises ``TypeMismatchError`` at the current path.
- ``bool`` is not accepted where a number is expected.
- NaN and infinities are rejected; they have no strict JSON encoding.
- ``MomentField.equals`` always returns False, so moments never contribute to the
  structural equality of an enclosing object, even for identical timestamps.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from .errors import TypeMismatchError
from .path import Path

__all__ = [
    "Field",
    "AnyField",
    "NumberField",
    "StringField",
    "BooleanField",
    "EnumField",
    "MomentField",
]

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Field(ABC, Generic[T]):
    """
    Codec + comparator contract implemented by every field.

    Attributes:
        optional (bool): When True the owning composite substitutes ``ABSENT`` for a
            missing/null input value and omits the key on encode; decode/encode are
            never invoked with an absent value.
    """

    optional: bool = field(default=False, kw_only=True)

    @abstractmethod
    def decode(self, raw: Any, path: Path) -> T:
        """Decode a JSON-like value, raising ``MappingError`` on shape mismatch."""
        ...

    @abstractmethod
    def encode(self, value: T, path: Path) -> Any:
        """Encode a domain value to a JSON-compatible tree."""
        ...

    @abstractmethod
    def equals(self, a: T, b: T) -> bool:
        """Structural comparison specific to this field's value type."""
        ...

    def with_optional(self, optional: bool) -> Field[T]:
        """Return this field with the given optionality (a copy when it differs)."""
        if self.optional == optional:
            return self
        return replace(self, optional=optional)


def _mismatch(path: Path, expected: str, raw: Any) -> TypeMismatchError:
    return path.error(f"expected {expected}, got: {raw!r}", TypeMismatchError)


@dataclass(frozen=True)
class AnyField(Field[Any]):
    """Pass-through assignment field used when a schema entry names no type."""

    def decode(self, raw: Any, path: Path) -> Any:
        return raw

    def encode(self, value: Any, path: Path) -> Any:
        return value

    def equals(self, a: Any, b: Any) -> bool:
        return a == b


@dataclass(frozen=True)
class NumberField(Field[float]):
    def decode(self, raw: Any, path: Path) -> float:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise _mismatch(path, "number", raw)
        if isinstance(raw, float) and not math.isfinite(raw):
            raise _mismatch(path, "finite number", raw)
        return raw

    def encode(self, value: float, path: Path) -> Any:
        return value

    def equals(self, a: float, b: float) -> bool:
        return a == b


@dataclass(frozen=True)
class StringField(Field[str]):
    def decode(self, raw: Any, path: Path) -> str:
        if not isinstance(raw, str):
            raise _mismatch(path, "string", raw)
        return raw

    def encode(self, value: str, path: Path) -> Any:
        return value

    def equals(self, a: str, b: str) -> bool:
        return a == b


@dataclass(frozen=True)
class BooleanField(Field[bool]):
    def decode(self, raw: Any, path: Path) -> bool:
        if not isinstance(raw, bool):
            raise _mismatch(path, "boolean", raw)
        return raw

    def encode(self, value: bool, path: Path) -> Any:
        return value

    def equals(self, a: bool, b: bool) -> bool:
        return a is b


@dataclass(frozen=True)
class EnumField(Field[E]):
    """
    Enum members on the domain side, member values on the wire.

    Attributes:
        enum (type[Enum]): Enum class whose ``.value`` strings/numbers are accepted.

    Examples:
        >>> from enum import Enum
        >>> from pages.mapping.path import ROOT
        >>> class Unit(str, Enum):
        ...     DAYS = "days"
        ...     WEEKS = "weeks"
        >>> EnumField(Unit).decode("days", ROOT) is Unit.DAYS
        True
    """

    enum: type[E]

    def decode(self, raw: Any, path: Path) -> E:
        for member in self.enum:
            if member.value == raw and type(member.value) is type(raw):
                return member
        expected = ", ".join(str(m.value) for m in self.enum)
        raise path.error(f"expected one of: {expected}, got: {raw!r}", TypeMismatchError)

    def encode(self, value: E, path: Path) -> Any:
        return value.value

    def equals(self, a: E, b: E) -> bool:
        return a is b


@dataclass(frozen=True)
class MomentField(Field[datetime]):
    """
    Epoch milliseconds on the wire, aware UTC ``datetime`` on the domain side.

    Notes:
        ``equals`` unconditionally returns False. Compare moments by value
        (``a == b``) where equality matters.
    """

    inner: NumberField = field(default_factory=NumberField)

    def decode(self, raw: Any, path: Path) -> datetime:
        millis = self.inner.decode(raw, path)
        try:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise path.error(f"timestamp out of range, got: {raw!r}", TypeMismatchError) from None

    def encode(self, value: datetime, path: Path) -> Any:
        return round(value.timestamp() * 1000)

    def equals(self, a: datetime, b: datetime) -> bool:
        return False
