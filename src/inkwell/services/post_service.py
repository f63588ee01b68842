"""Service-level operations on posts and stars."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from inkwell.core.errors import (
    AlreadyStarredError,
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    NotStarredError,
    OwnershipError,
)
from inkwell.core.settings import Settings, settings
from inkwell.models.post import Post, PostSort, Privacy
from inkwell.repositories import (
    ActivityRepository,
    PostQuery,
    PostRepository,
    ProfileRepository,
    StarRepository,
    StatisticRepository,
)
from inkwell.schemas.common import Connection, ConnectionArgs
from inkwell.schemas.post import (
    PostCreate,
    PostResponse,
    PostUpdate,
    StargazerResponse,
    StarResponse,
)
from inkwell.schemas.profile import ProfileResponse
from inkwell.services.matching import matching_span
from inkwell.services.pagination import paginate
from inkwell.services.slug import slug_candidates
from inkwell.services.trending import trending_posts
from inkwell.services.visibility import can_view, effective_privacy

__all__ = ["PostFilters", "PostService", "to_post_out"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostFilters:
    """Caller-supplied filters for post listings."""

    profile_id: str | None = None
    privacy: Privacy | None = None
    language: str | None = None
    query: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    sort: PostSort = PostSort.RECENT


def to_post_out(post: Post, **extra: Any) -> PostResponse:
    """Convert a Post ORM instance to an API schema."""
    return PostResponse.model_validate(post).model_copy(update=extra)


def require_caller(caller_id: str | None) -> str:
    """Return ``caller_id`` or fail when the request is anonymous."""
    if caller_id is None:
        raise AuthenticationError("You need to be logged in to perform this action")
    return caller_id


class PostService:
    """Posts, stars and post listings for one request."""

    def __init__(self, session: Session, *, config: Settings = settings) -> None:
        self.session = session
        self.config = config
        self.posts = PostRepository(session)
        self.stars = StarRepository(session)
        self.profiles = ProfileRepository(session)
        self.activity = ActivityRepository(session)
        self.statistics = StatisticRepository(session)

    def create(self, caller_id: str | None, data: PostCreate) -> PostResponse:
        """Create a post owned by the caller.

        The slug is derived from the title and suffixed with an increasing
        integer until it is free. New posts start with one view so that they
        can rank in trending before organic views arrive.
        """
        profile_id = self._require_profile(caller_id)
        values = data.model_dump()

        post: Post | None = None
        for slug in slug_candidates(data.title):
            if self.posts.slug_exists(slug):
                continue
            post = self.posts.create(profile_id=profile_id, slug=slug, values=values)
            if post is not None:
                break

        self.statistics.register_post_view(post.id)
        self.activity.create_blog_activity(profile_id, post.id)
        self.session.commit()
        logger.info("Created post %s (%s) for profile %s", post.id, post.slug, profile_id)
        return to_post_out(post)

    def update(self, caller_id: str | None, post_id: str, data: PostUpdate) -> PostResponse:
        """Apply a partial update; only the owner may do so."""
        caller_id = require_caller(caller_id)
        post = self._get_owned(caller_id, post_id)
        self.posts.update(post, data.model_dump(exclude_unset=True))
        self.session.commit()
        logger.info("Updated post %s", post.id)
        return to_post_out(post)

    def delete(self, caller_id: str | None, post_id: str) -> bool:
        """Delete a post; only the owner may do so."""
        caller_id = require_caller(caller_id)
        post = self._get_owned(caller_id, post_id)
        self.posts.delete(post)
        self.session.commit()
        logger.info("Deleted post %s", post_id)
        return True

    def find(
        self,
        caller_id: str | None,
        post_id: str | None = None,
        slug: str | None = None,
    ) -> PostResponse:
        """Return one post by id or slug.

        Posts hidden from the caller are reported as missing. Reads by anyone
        but the owner count as a view.
        """
        if post_id is None and slug is None:
            raise InvalidInputError("Either a post id or a slug is required")
        post = self.posts.get_by_id(post_id) if post_id is not None else self.posts.get_by_slug(slug)
        if post is None or not can_view(caller_id, post):
            raise NotFoundError("Post not found")

        if post.profile_id != caller_id:
            self.statistics.register_post_view(post.id)
            self.session.commit()

        return to_post_out(
            post,
            views=self.statistics.post_views(post.id),
            star_count=self.posts.count_stars(post.id),
        )

    def find_all(
        self,
        caller_id: str | None,
        args: ConnectionArgs,
        filters: PostFilters | None = None,
    ) -> Connection[PostResponse]:
        """List posts visible to the caller."""
        filters = filters or PostFilters()
        if (
            filters.created_from is not None
            and filters.created_to is not None
            and filters.created_from > filters.created_to
        ):
            raise InvalidInputError("'from' must not be later than 'to'")

        privacy = effective_privacy(caller_id, filters.profile_id, filters.privacy)
        query = PostQuery(
            profile_id=filters.profile_id,
            privacy=privacy,
            language=filters.language,
            search=filters.query or None,
            created_from=filters.created_from,
            created_to=filters.created_to,
            sort=filters.sort,
        )
        connection = paginate(self.posts.page(query), args)

        if not query.search:
            return connection.map(to_post_out)
        return connection.map(
            lambda post: to_post_out(
                post,
                matching_query=matching_span(
                    post,
                    query.search,
                    context=self.config.match_context_chars,
                    max_depth=self.config.document_max_depth,
                ),
            )
        )

    def find_trending(
        self,
        args: ConnectionArgs,
        *,
        profile_id: str | None = None,
        language: str | None = None,
    ) -> Connection[PostResponse]:
        """Public posts ranked by views over the trending window."""
        connection = trending_posts(
            self.session,
            args,
            profile_id=profile_id,
            language=language,
            window_days=self.config.trending_window_days,
        )
        return connection.map(to_post_out)

    def star(self, caller_id: str | None, post_id: str) -> StarResponse:
        """Star a post the caller can see."""
        profile_id = self._require_profile(caller_id)
        self._get_visible(profile_id, post_id)

        if self.stars.get(profile_id, post_id) is not None:
            raise AlreadyStarredError(post_id)
        star = self.stars.create(profile_id, post_id)
        self.activity.create_star_activity(profile_id, post_id, starred=True)
        self.session.commit()
        logger.info("Profile %s starred post %s", profile_id, post_id)
        return StarResponse.model_validate(star)

    def unstar(self, caller_id: str | None, post_id: str) -> StarResponse:
        """Remove the caller's star from a post."""
        profile_id = self._require_profile(caller_id)
        self._get_visible(profile_id, post_id)

        star = self.stars.get(profile_id, post_id)
        if star is None:
            raise NotStarredError(post_id)
        result = StarResponse.model_validate(star)
        if not self.stars.delete(profile_id, post_id):
            # Removed by a concurrent request after the check above.
            raise NotStarredError(post_id)
        self.activity.create_star_activity(profile_id, post_id, starred=False)
        self.session.commit()
        logger.info("Profile %s unstarred post %s", profile_id, post_id)
        return result

    def stargazers(
        self,
        caller_id: str | None,
        post_id: str,
        args: ConnectionArgs,
    ) -> Connection[StargazerResponse]:
        """Profiles that starred a post the caller can see."""
        self._get_visible(caller_id, post_id)
        connection = paginate(self.stars.by_post(post_id), args)
        return connection.map(
            lambda node: StargazerResponse(
                profile=ProfileResponse.model_validate(node[0]),
                created_at=node[1],
            )
        )

    def _require_profile(self, caller_id: str | None) -> str:
        caller_id = require_caller(caller_id)
        if not self.profiles.exists(caller_id):
            raise NotFoundError("Profile not found; create a profile first")
        return caller_id

    def _get_visible(self, caller_id: str | None, post_id: str) -> Post:
        post = self.posts.get_by_id(post_id)
        if post is None or not can_view(caller_id, post):
            raise NotFoundError("Post not found")
        return post

    def _get_owned(self, caller_id: str, post_id: str) -> Post:
        post = self._get_visible(caller_id, post_id)
        if post.profile_id != caller_id:
            raise OwnershipError("You are not the owner of this post.")
        return post
