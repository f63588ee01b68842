"""Relay-style connection pagination over ordered sources.

A source is a pair of callables:

* ``fetch(cursor_key, limit, direction)`` returning ``(node, sort_key)`` pairs
  in *scan order*: moving away from the cursor in ``direction``. For backward
  pagination that is the reverse of the connection order.
* ``count()`` returning the size of the filtered set regardless of cursors.

The paginator asks for one row more than requested to learn whether another
page exists without a second round trip.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from inkwell.core.errors import (
    InvalidPaginationArgsError,
    MalformedCursorError,
    SourceUnavailableError,
)
from inkwell.schemas.common import Connection, ConnectionArgs, Edge, PageInfo
from inkwell.services import cursor as cursor_codec
from inkwell.services.cursor import SortKey

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Direction(enum.StrEnum):
    FORWARD = "forward"
    BACKWARD = "backward"


FetchRows = Callable[[SortKey | None, int | None, Direction], Sequence[tuple[Any, SortKey]]]
CountRows = Callable[[], int]


@dataclass(frozen=True)
class Source(Generic[T]):
    """An ordered, countable data source."""

    fetch: FetchRows
    count: CountRows


def validate_args(args: ConnectionArgs) -> None:
    """Reject argument combinations the connection contract does not allow."""
    if args.first is not None and args.first < 0:
        raise InvalidPaginationArgsError("Argument 'first' must be a non-negative integer")
    if args.last is not None and args.last < 0:
        raise InvalidPaginationArgsError("Argument 'last' must be a non-negative integer")
    if args.first is not None and args.last is not None:
        raise InvalidPaginationArgsError("Mixing 'first' and 'last' is not supported")
    if args.first is not None and args.before is not None:
        raise InvalidPaginationArgsError("Argument 'before' cannot be combined with 'first'")
    if args.last is not None and args.after is not None:
        raise InvalidPaginationArgsError("Argument 'after' cannot be combined with 'last'")
    if args.after is not None and args.before is not None:
        raise InvalidPaginationArgsError("Arguments 'after' and 'before' are mutually exclusive")


def paginate(source: Source[Any], args: ConnectionArgs) -> Connection[Any]:
    """Produce one page of ``source`` as a connection.

    Raises:
        InvalidPaginationArgsError: If the arguments break the contract.
        MalformedCursorError: If a cursor cannot be decoded.
        SourceUnavailableError: If the store fails while fetching or counting.
    """
    validate_args(args)

    if args.last is not None or (args.first is None and args.before is not None):
        direction = Direction.BACKWARD
        limit = args.last
        raw_cursor = args.before
    else:
        direction = Direction.FORWARD
        limit = args.first
        raw_cursor = args.after
    key = cursor_codec.decode(raw_cursor) if raw_cursor is not None else None

    try:
        rows = list(source.fetch(key, limit + 1 if limit is not None else None, direction))
        total_count = source.count()
    except SQLAlchemyError as err:
        logger.error("Pagination source failed: %s", err)
        raise SourceUnavailableError("The data source is unavailable") from err

    has_more = limit is not None and len(rows) > limit
    if has_more:
        rows = rows[:limit]
    if direction is Direction.BACKWARD:
        rows.reverse()

    if limit is None:
        has_next_page = has_previous_page = False
    elif direction is Direction.FORWARD:
        has_next_page = has_more
        has_previous_page = raw_cursor is not None
    else:
        has_next_page = raw_cursor is not None
        has_previous_page = has_more

    edges = [Edge[Any](cursor=cursor_codec.encode(sort_key), node=node) for node, sort_key in rows]
    page_info = PageInfo(
        has_next_page=has_next_page,
        has_previous_page=has_previous_page,
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
    )
    logger.debug(
        "paginate(%s, limit=%s) -> %d edges of %d, next=%s prev=%s",
        direction.value,
        limit,
        len(edges),
        total_count,
        has_next_page,
        has_previous_page,
    )
    return Connection[Any](edges=edges, page_info=page_info, total_count=total_count)


def sequence_source(items: Sequence[T], key: Callable[[int, T], SortKey]) -> Source[T]:
    """Wrap an already-ordered list as a source.

    ``key(position, item)`` must start with the position so that a cursor can
    be located again after decoding.
    """
    keyed = [(item, key(position, item)) for position, item in enumerate(items)]

    def fetch(cursor_key: SortKey | None, limit: int | None, direction: Direction):
        if direction is Direction.FORWARD:
            start = 0 if cursor_key is None else _position(cursor_key) + 1
            window = keyed[start:]
        else:
            end = len(keyed) if cursor_key is None else _position(cursor_key)
            window = keyed[:end][::-1]
        return window if limit is None else window[:limit]

    return Source(fetch=fetch, count=lambda: len(keyed))


def _position(key: SortKey) -> int:
    position = key[0]
    if not isinstance(position, int) or isinstance(position, bool) or position < 0:
        raise MalformedCursorError("Cursor does not belong to this connection")
    return position
