"""
Canonical JSON text and fingerprint helpers over the mapping engine.

Provides a single canonical JSON policy plus thin ``loads``/``dumps`` wrappers
that pair the stdlib ``json`` module with ``decode``/``encode``. This module is
zero-IO.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - ``fingerprint`` hashes the UTF-8 canonical JSON of the encoded value with
      SHA-256, so re-ordering keys of the source document does not change it.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from .api import decode, encode
from .schema import FieldTarget

__all__ = [
    "json_loads",
    "json_dumps_canonical",
    "loads",
    "dumps",
    "fingerprint",
]


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Args:
        s (str): JSON string to parse.

    Returns:
        Any: Decoded Python object (dict, list, str, int, float, bool, or None).
    """
    return json.loads(s)


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Notes:
        The input must already be JSON-compatible (e.g. the output of ``encode``);
        no coercion of unsupported types is attempted.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def loads(s: str, schema: FieldTarget) -> Any:
    """Parse JSON text and decode it under ``schema``."""
    return decode(json_loads(s), schema)


def dumps(value: Any, schema: FieldTarget | None = None) -> str:
    """Encode ``value`` and render it as canonical JSON text."""
    return json_dumps_canonical(encode(value, schema))


def fingerprint(value: Any, schema: FieldTarget | None = None) -> str:
    """
    Compute a stable SHA-256 hex digest of an encoded value.

    Examples:
        >>> from pages.mapping import types
        >>> fingerprint([1, 2], types.Array(types.Number)) == fingerprint([1, 2], types.Array(types.Number))
        True
    """
    h = hashlib.sha256()
    h.update(dumps(value, schema).encode("utf-8"))
    return h.hexdigest()
