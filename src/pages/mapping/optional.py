"""
Present/absent wrapper for optional schema fields.

Decoding an optional field yields either ``Present(value)`` or ``ABSENT``, never a
raw ``None``. An absent optional never reaches the inner field's decode/encode.

Examples:
    >>> from pages.mapping.optional import present, absent
    >>> present(3).or_else(0)
    3
    >>> absent().or_else(0)
    0
    >>> absent() is absent()
    True
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

__all__ = [
    "Present",
    "Absent",
    "ABSENT",
    "Option",
    "present",
    "absent",
]

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Present(Generic[T]):
    """An optional field that holds a value."""

    value: T

    @property
    def is_present(self) -> bool:
        return True

    def get(self) -> T:
        return self.value

    def or_else(self, default: Any) -> T:
        return self.value

    def accept(self, consumer: Callable[[T], Any]) -> None:
        """Invoke ``consumer`` with the held value."""
        consumer(self.value)


class Absent:
    """An optional field with no value. Use the ``ABSENT`` singleton."""

    __slots__ = ()
    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_present(self) -> bool:
        return False

    def get(self) -> Any:
        raise LookupError("optional value is absent")

    def or_else(self, default: T) -> T:
        return default

    def accept(self, consumer: Callable[[Any], Any]) -> None:
        return None

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()

Option = Union[Present[T], Absent]


def present(value: T) -> Present[T]:
    return Present(value)


def absent() -> Absent:
    return ABSENT
