"""Shared Pydantic schemas for paginated API responses.

Connections follow the Relay shape: a list of edges, each carrying a node and
its cursor, plus navigation metadata and the total size of the filtered set.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Navigation metadata for a single page."""

    has_next_page: bool = Field(False, description="Whether more items exist after this page.")
    has_previous_page: bool = Field(
        False, description="Whether items exist before this page."
    )
    start_cursor: str | None = Field(None, description="Cursor of the first item.")
    end_cursor: str | None = Field(None, description="Cursor of the last item.")


class Edge(BaseModel, Generic[T]):
    """A node together with its opaque cursor."""

    cursor: str = Field(..., description="Opaque cursor token for this item.")
    node: T


class Connection(BaseModel, Generic[T]):
    """Paginated result set."""

    edges: list[Edge[T]] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)
    total_count: int = Field(0, ge=0, description="Size of the filtered set, ignoring the page window.")

    @property
    def nodes(self) -> list[T]:
        """Return the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]

    def map(self, fn: Callable[[T], Any]) -> Connection[Any]:
        """Return a copy with every node transformed by ``fn``."""
        return Connection[Any](
            edges=[Edge[Any](cursor=edge.cursor, node=fn(edge.node)) for edge in self.edges],
            page_info=self.page_info,
            total_count=self.total_count,
        )


class ConnectionArgs(BaseModel):
    """Relay pagination arguments as received from the caller."""

    first: int | None = None
    last: int | None = None
    after: str | None = None
    before: str | None = None
