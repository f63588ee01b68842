"""Keyset (seek) helpers shared by the relation repositories.

Every connection in this service is ordered descending on a list of columns
whose last entry is unique. Forward pages continue strictly below the cursor
key; backward pages scan strictly above it in ascending order, which the
paginator reverses afterwards.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, or_

from inkwell.core.errors import MalformedCursorError
from inkwell.services.cursor import SortKey
from inkwell.services.pagination import Direction

__all__ = ["seek"]


def _check_key(columns: Sequence[ColumnElement[Any]], key: SortKey) -> None:
    if len(key) != len(columns):
        raise MalformedCursorError("Cursor does not belong to this connection")
    for column, value in zip(columns, key):
        try:
            expected = column.type.python_type
        except NotImplementedError:
            continue
        if value is not None and not isinstance(value, expected):
            raise MalformedCursorError("Cursor does not belong to this connection")


def _beyond(
    columns: Sequence[ColumnElement[Any]],
    key: SortKey,
    compare: Callable[[Any, Any], ColumnElement[bool]],
) -> ColumnElement[bool]:
    # (a, b, c) < (x, y, z)  ==  a < x OR (a = x AND b < y) OR (a = x AND b = y AND c < z)
    clauses = []
    for index, column in enumerate(columns):
        prefix = [columns[i] == key[i] for i in range(index)]
        clauses.append(and_(*prefix, compare(column, key[index])))
    return or_(*clauses)


def seek(
    stmt: Select[Any],
    columns: Sequence[ColumnElement[Any]],
    key: SortKey | None,
    limit: int | None,
    direction: Direction,
) -> Select[Any]:
    """Restrict ``stmt`` to the rows following ``key`` in ``direction``."""
    forward = direction is Direction.FORWARD
    if key is not None:
        _check_key(columns, key)
        stmt = stmt.where(_beyond(columns, key, operator.lt if forward else operator.gt))
    stmt = stmt.order_by(*[column.desc() if forward else column.asc() for column in columns])
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt
