"""Rendering of a profile's de-duplicated activity feed."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Row
from sqlalchemy.orm import Session

from inkwell.models.follow import Follow
from inkwell.models.post import Post
from inkwell.models.profile import Profile
from inkwell.repositories import ActivityRepository, FollowRepository, PostRepository
from inkwell.schemas.activity import ActivityResponse
from inkwell.schemas.common import Connection, ConnectionArgs
from inkwell.schemas.profile import FollowedProfileResponse, ProfileResponse
from inkwell.services.pagination import paginate
from inkwell.services.post_service import to_post_out
from inkwell.services.visibility import can_view


class ActivityFeed:
    """Paginates activity groups and attaches the posts and follows they refer to."""

    def __init__(self, session: Session) -> None:
        self.activity = ActivityRepository(session)
        self.posts = PostRepository(session)
        self.follows = FollowRepository(session)

    def connection(
        self,
        viewer_id: str | None,
        profile_id: str,
        args: ConnectionArgs,
    ) -> Connection[ActivityResponse]:
        page = paginate(self.activity.feed(profile_id), args)
        rows = page.nodes

        # One query per referenced relation for the whole page.
        posts = {
            post.id: post
            for post in self.posts.get_many([row.post_id for row in rows if row.post_id])
        }
        follows = self.follows.get_many_with_followed([row.follow_id for row in rows if row.follow_id])

        return page.map(lambda row: self._render(row, viewer_id, posts, follows))

    @staticmethod
    def _render(
        row: Row[Any],
        viewer_id: str | None,
        posts: dict[str, Post],
        follows: dict[str, tuple[Follow, Profile]],
    ) -> ActivityResponse:
        post = posts.get(row.post_id) if row.post_id else None
        followed = follows.get(row.follow_id) if row.follow_id else None

        return ActivityResponse(
            type=row.type,
            created_at=row.created_at,
            post=to_post_out(post) if post is not None and can_view(viewer_id, post) else None,
            follow=(
                FollowedProfileResponse(
                    created_at=followed[0].created_at,
                    followed=ProfileResponse.model_validate(followed[1]),
                )
                if followed is not None
                else None
            ),
        )
