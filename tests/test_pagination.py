# mypy: ignore-errors
# tests/test_pagination.py
"""Tests for the Relay connection paginator over in-memory sources."""

import pytest
from sqlalchemy.exc import OperationalError

from inkwell.core.errors import (
    InvalidPaginationArgsError,
    MalformedCursorError,
    SourceUnavailableError,
)
from inkwell.schemas.common import ConnectionArgs
from inkwell.services import cursor
from inkwell.services.pagination import Source, paginate, sequence_source

ITEMS = ["p10", "p9", "p8", "p7", "p6", "p5", "p4", "p3", "p2", "p1"]


def _source(items=ITEMS):
    return sequence_source(items, key=lambda position, item: (position, item))


def _page(**kwargs):
    return paginate(_source(), ConnectionArgs(**kwargs))


def test_first_page() -> None:
    """The first page holds the newest items and points forward."""
    page = _page(first=3)
    assert page.nodes == ["p10", "p9", "p8"]
    assert page.page_info.has_next_page is True
    assert page.page_info.has_previous_page is False
    assert page.page_info.start_cursor == page.edges[0].cursor
    assert page.page_info.end_cursor == page.edges[-1].cursor
    assert page.total_count == 10


def test_forward_pages_cover_everything_once() -> None:
    """Walking with first/after visits every item exactly once, in order."""
    seen = []
    after = None
    while True:
        page = _page(first=4, after=after)
        seen.extend(page.nodes)
        assert len(page.edges) <= 4
        if not page.page_info.has_next_page:
            break
        after = page.page_info.end_cursor
    assert seen == ITEMS


def test_page_after_cursor_reports_previous_page() -> None:
    first = _page(first=3)
    second = _page(first=3, after=first.page_info.end_cursor)
    assert second.nodes == ["p7", "p6", "p5"]
    assert second.page_info.has_previous_page is True
    assert second.page_info.has_next_page is True


def test_last_page_exactly_full() -> None:
    """A final page that is exactly full does not claim a next page."""
    page = _page(first=10)
    assert len(page.nodes) == 10
    assert page.page_info.has_next_page is False


def test_backward_page_keeps_connection_order() -> None:
    page = _page(last=3)
    assert page.nodes == ["p3", "p2", "p1"]
    assert page.page_info.has_previous_page is True
    assert page.page_info.has_next_page is False


def test_backward_page_before_cursor() -> None:
    anchor = _page(first=6)
    page = _page(last=2, before=anchor.page_info.end_cursor)
    # end cursor of the anchor page is p5
    assert page.nodes == ["p7", "p6"]
    assert page.page_info.has_next_page is True
    assert page.page_info.has_previous_page is True


def test_before_without_size_returns_everything_before() -> None:
    anchor = _page(first=3)
    page = _page(before=anchor.page_info.end_cursor)
    assert page.nodes == ["p10", "p9"]
    assert page.page_info.has_next_page is False
    assert page.page_info.has_previous_page is False


def test_no_arguments_returns_all_items() -> None:
    page = _page()
    assert page.nodes == ITEMS
    assert page.page_info.has_next_page is False
    assert page.page_info.has_previous_page is False


def test_zero_page_size() -> None:
    """first=0 yields no edges but still reports what follows."""
    page = _page(first=0)
    assert page.edges == []
    assert page.page_info.start_cursor is None
    assert page.page_info.end_cursor is None
    assert page.page_info.has_next_page is True
    assert page.total_count == 10


def test_empty_source() -> None:
    page = paginate(_source([]), ConnectionArgs(first=5))
    assert page.edges == []
    assert page.total_count == 0
    assert page.page_info.has_next_page is False


def test_total_count_ignores_cursor() -> None:
    first = _page(first=2)
    later = _page(first=2, after=first.page_info.end_cursor)
    assert first.total_count == later.total_count == len(ITEMS)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"first": -1},
        {"last": -2},
        {"first": 2, "last": 2},
        {"first": 2, "before": "x"},
        {"last": 2, "after": "x"},
        {"after": "x", "before": "y"},
    ],
)
def test_invalid_argument_combinations(kwargs) -> None:
    with pytest.raises(InvalidPaginationArgsError) as exc_info:
        _page(**kwargs)
    assert exc_info.value.code == "INVALID_PAGINATION_ARGS"


def test_malformed_cursor() -> None:
    with pytest.raises(MalformedCursorError):
        _page(first=2, after="garbage")


def test_cursor_from_another_connection_is_rejected() -> None:
    foreign = cursor.encode(("2025-01-01", "p1"))
    with pytest.raises(MalformedCursorError):
        _page(first=2, after=foreign)


def test_store_failure_maps_to_source_unavailable() -> None:
    def fetch(key, limit, direction):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    source = Source(fetch=fetch, count=lambda: 0)
    with pytest.raises(SourceUnavailableError) as exc_info:
        paginate(source, ConnectionArgs(first=1))
    assert exc_info.value.status_code == 503
