"""Cursor encoding and decoding for pagination.

A cursor is an opaque string wrapping the sort key of a row: the values of
the ordering columns, always ending with a unique tie-breaker so that rows
sharing a primary sort value still have a strict order.

The format is URL-safe base64 over compact JSON::

    {"k": [{"$dt": "2025-01-15T10:30:00+00:00"}, "3f0c..."]}

Callers must not rely on the string representation; only
``decode(encode(key)) == key`` is guaranteed.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime
from typing import Any

from inkwell.core.errors import MalformedCursorError

__all__ = ["SortKey", "encode", "decode"]

SortKey = tuple[Any, ...]

_DATETIME_TAG = "$dt"
_SCALARS = (str, int, float, bool, type(None))


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_TAG: value.isoformat()}
    if isinstance(value, _SCALARS):
        return value
    raise TypeError(f"Unsupported cursor value type: {type(value).__name__}")


def _deserialize(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) != {_DATETIME_TAG} or not isinstance(value[_DATETIME_TAG], str):
            raise MalformedCursorError("Invalid cursor")
        try:
            return datetime.fromisoformat(value[_DATETIME_TAG])
        except ValueError as err:
            raise MalformedCursorError("Invalid cursor") from err
    if isinstance(value, _SCALARS):
        return value
    raise MalformedCursorError("Invalid cursor")


def encode(key: SortKey) -> str:
    """Encode a sort key to an opaque cursor string."""
    payload = {"k": [_serialize(value) for value in key]}
    json_str = json.dumps(payload, separators=(",", ":"))
    return base64.urlsafe_b64encode(json_str.encode()).decode().rstrip("=")


def decode(cursor: str) -> SortKey:
    """Decode a cursor string back into its sort key.

    Raises:
        MalformedCursorError: If the cursor was not produced by :func:`encode`.
    """
    if not cursor:
        raise MalformedCursorError("Invalid cursor")
    padding = "=" * (-len(cursor) % 4)
    try:
        raw = base64.urlsafe_b64decode((cursor + padding).encode())
        payload = json.loads(raw.decode())
    except (binascii.Error, UnicodeError, ValueError) as err:
        raise MalformedCursorError("Invalid cursor") from err

    if not isinstance(payload, dict) or set(payload) != {"k"}:
        raise MalformedCursorError("Invalid cursor")
    values = payload["k"]
    if not isinstance(values, list) or not values:
        raise MalformedCursorError("Invalid cursor")
    return tuple(_deserialize(value) for value in values)
