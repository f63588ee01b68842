"""Privacy rules deciding which posts a caller may see.

Rules, evaluated in order:

=========  ===============  =========  ==========================
viewer     viewer == owner  requested  effective constraint
=========  ===============  =========  ==========================
absent     -                any        PUBLIC only
present    no               any        PUBLIC only
present    yes              absent     none (all privacy levels)
present    yes              present    the requested level
=========  ===============  =========  ==========================

Asking for anything but PUBLIC without an identified viewer is an
authentication failure rather than a silent downgrade.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, false, or_

from inkwell.core.errors import AuthenticationError
from inkwell.models.post import Post, Privacy

__all__ = ["effective_privacy", "can_view", "visible_to"]


def effective_privacy(
    viewer_id: str | None,
    owner_id: str | None,
    requested: Privacy | None,
) -> Privacy | None:
    """Return the privacy level a relation query must be restricted to.

    ``None`` means no restriction. An absent ``owner_id`` (a listing that is
    not scoped to one profile) never matches the viewer.
    """
    if viewer_id is None and requested is not None and requested != Privacy.PUBLIC:
        raise AuthenticationError("You need to be logged in to view non-public posts")
    if viewer_id is None or owner_id is None or viewer_id != owner_id:
        return Privacy.PUBLIC
    return requested


def can_view(viewer_id: str | None, post: Post) -> bool:
    """Return whether ``viewer_id`` may see ``post``."""
    return post.privacy == Privacy.PUBLIC or (
        viewer_id is not None and post.profile_id == viewer_id
    )


def visible_to(viewer_id: str | None) -> ColumnElement[bool]:
    """SQL form of :func:`can_view` for queries joining many owners."""
    return or_(
        Post.privacy == Privacy.PUBLIC,
        Post.profile_id == viewer_id if viewer_id is not None else false(),
    )
