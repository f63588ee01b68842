"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.models.post import Post, PostSort, Privacy
from inkwell.models.star import Star
from inkwell.repositories.keyset import seek
from inkwell.services.cursor import SortKey
from inkwell.services.pagination import Direction, Source

__all__ = ["PostRepository", "PostQuery", "PostSort"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostQuery:
    """Filters applied to a post listing.

    ``privacy`` is the constraint produced by the visibility rules, not the
    raw caller request.
    """

    profile_id: str | None = None
    privacy: Privacy | None = Privacy.PUBLIC
    language: str | None = None
    search: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    sort: PostSort = PostSort.RECENT


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_by_slug(self, slug: str) -> Post | None:
        """Return a post by its slug."""
        return self.session.execute(select(Post).where(Post.slug == slug)).scalars().first()

    def slug_exists(self, slug: str) -> bool:
        """Return whether ``slug`` is already taken."""
        stmt = select(Post.id).where(Post.slug == slug).limit(1)
        return self.session.execute(stmt).first() is not None

    def create(self, *, profile_id: str, slug: str, values: dict[str, Any]) -> Post | None:
        """Insert a post under ``slug``.

        Returns ``None`` when the slug was claimed concurrently so the caller
        can retry with the next candidate.
        """
        post = Post(profile_id=profile_id, slug=slug, **values)
        try:
            with self.session.begin_nested():
                self.session.add(post)
        except IntegrityError:
            logger.warning("Slug %s was taken concurrently", slug)
            return None
        return post

    def update(self, post: Post, values: dict[str, Any]) -> Post:
        """Apply partial updates to an existing post."""
        for key, value in values.items():
            setattr(post, key, value)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove a post; stars and statistics cascade in the store."""
        self.session.delete(post)
        self.session.flush()

    def get_many(
        self,
        post_ids: Sequence[str],
        *,
        privacy: Privacy | None = None,
        profile_id: str | None = None,
        language: str | None = None,
    ) -> list[Post]:
        """Return the posts among ``post_ids`` that match the filters, in store order."""
        if not post_ids:
            return []
        stmt = select(Post).where(Post.id.in_(post_ids))
        if privacy is not None:
            stmt = stmt.where(Post.privacy == privacy)
        if profile_id is not None:
            stmt = stmt.where(Post.profile_id == profile_id)
        if language is not None:
            stmt = stmt.where(Post.language == language)
        return list(self.session.execute(stmt).scalars())

    def count_stars(self, post_id: str) -> int:
        """Return how many profiles starred ``post_id``."""
        stmt = select(func.count()).select_from(Star).where(Star.post_id == post_id)
        return self.session.execute(stmt).scalar_one()

    def page(self, query: PostQuery) -> Source[Post]:
        """Return a paginated source over the posts matching ``query``."""
        conditions = self._conditions(query)

        if query.sort == PostSort.STARS:
            star_counts = (
                select(Star.post_id, func.count().label("stars"))
                .group_by(Star.post_id)
                .subquery("star_counts")
            )
            star_count = func.coalesce(star_counts.c.stars, 0)
            base = (
                select(Post, star_count.label("star_count"))
                .outerjoin(star_counts, star_counts.c.post_id == Post.id)
                .where(*conditions)
            )
            columns: list[ColumnElement[Any]] = [star_count, Post.id]
        else:
            base = select(Post).where(*conditions)
            columns = [Post.created_at, Post.id]

        def fetch(key: SortKey | None, limit: int | None, direction: Direction):
            stmt = seek(base, columns, key, limit, direction)
            if query.sort == PostSort.STARS:
                return [
                    (post, (int(stars), post.id))
                    for post, stars in self.session.execute(stmt).all()
                ]
            return [(post, (post.created_at, post.id)) for post in self.session.execute(stmt).scalars()]

        def count() -> int:
            stmt = select(func.count()).select_from(Post).where(*conditions)
            return self.session.execute(stmt).scalar_one()

        return Source(fetch=fetch, count=count)

    @staticmethod
    def _conditions(query: PostQuery) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if query.profile_id is not None:
            conditions.append(Post.profile_id == query.profile_id)
        if query.privacy is not None:
            conditions.append(Post.privacy == query.privacy)
        if query.language is not None:
            conditions.append(Post.language == query.language)
        if query.created_from is not None:
            conditions.append(Post.created_at >= query.created_from)
        if query.created_to is not None:
            conditions.append(Post.created_at <= query.created_to)
        if query.search:
            conditions.append(
                or_(
                    Post.title.icontains(query.search, autoescape=True),
                    Post.summary.icontains(query.search, autoescape=True),
                    Post.content_text.icontains(query.search, autoescape=True),
                )
            )
        return conditions
