"""
Immutable access paths used to localize decode/encode errors.

A Path is a singly-linked chain of accessors built while a decode or encode
call descends into nested values. It is created per call and discarded once
the call returns; nothing retains a Path after error construction.

Notes:
    - The root Path has ``name=None`` and renders as ``object``.
    - Bracketed names (``"[3]"``) render verbatim; other names get a ``.`` prefix.

Examples:
    >>> from pages.mapping.path import ROOT
    >>> from pages.mapping.errors import TypeMismatchError
    >>> p = ROOT.extend("components").extend("[2]").extend("title")
    >>> p.format()
    'object.components[2].title'
    >>> str(p.error("expected string, got: 1", TypeMismatchError))
    'object.components[2].title: expected string, got: 1'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import MappingError

__all__ = [
    "Path",
    "ROOT",
]

E = TypeVar("E", bound=MappingError)


@dataclass(slots=True, frozen=True)
class Path:
    """
    One accessor in an error-location chain.

    Attributes:
        name (str | None): Field name, bracketed index/key, or None for the root.
        parent (Path | None): Enclosing accessor; None only for the root.
    """

    name: str | None = None
    parent: Path | None = None

    def extend(self, name: str) -> Path:
        """Return a child path; self is left untouched."""
        return Path(name, self)

    def index(self, i: int) -> Path:
        return self.extend(f"[{i}]")

    def error(self, message: str, kind: type[E], **extra: Any) -> E:
        """
        Build (but do not raise) an error of the given kind at this location.

        Args:
            message (str): Description of the failure.
            kind (type[MappingError]): Concrete error class to instantiate.
            **extra: Additional keyword arguments forwarded to ``kind``.

        Returns:
            MappingError: Instance whose ``path`` is this location, formatted.
        """
        return kind(self.format(), message, **extra)

    def format(self) -> str:
        parts: list[str] = []
        current: Path | None = self
        while current is not None:
            if current.name is None:
                parts.append("object")
                break
            if current.name.startswith("["):
                parts.append(current.name)
            else:
                parts.append(f".{current.name}")
            current = current.parent
        return "".join(reversed(parts))

    def __str__(self) -> str:
        return self.format()


ROOT = Path()
