"""Shared API dependencies for caller identity and pagination."""

from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from inkwell.core.errors import AuthenticationError
from inkwell.core.settings import settings
from inkwell.db.session import get_db
from inkwell.schemas.common import ConnectionArgs

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_viewer_id(request: Request) -> str | None:
    """Return the caller identity forwarded by the gateway, if any.

    Authentication happens upstream; this service only trusts the header.
    An empty header is treated as an anonymous request.
    """
    value = request.headers.get(settings.identity_header)
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_caller_id(viewer_id: Annotated[str | None, Depends(get_viewer_id)]) -> str:
    """Require an identified caller.

    Raises:
        AuthenticationError: If the request carries no identity.
    """
    if viewer_id is None:
        raise AuthenticationError("You need to be logged in to perform this action")
    return viewer_id


def get_connection_args(
    first: Annotated[int | None, Query(description="Page size when paging forward")] = None,
    last: Annotated[int | None, Query(description="Page size when paging backward")] = None,
    after: Annotated[str | None, Query(description="Cursor to page forward from")] = None,
    before: Annotated[str | None, Query(description="Cursor to page backward from")] = None,
) -> ConnectionArgs:
    """Collect Relay pagination arguments from the query string.

    Values are passed through unchecked so that the paginator reports invalid
    combinations with its own error codes.
    """
    return ConnectionArgs(first=first, last=last, after=after, before=before)


ViewerDep = Annotated[str | None, Depends(get_viewer_id)]
CallerDep = Annotated[str, Depends(get_caller_id)]
PageDep = Annotated[ConnectionArgs, Depends(get_connection_args)]
