"""Data access helpers for stars."""
from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.errors import AlreadyStarredError
from inkwell.models.post import Post, Privacy
from inkwell.models.profile import Profile
from inkwell.models.star import Star
from inkwell.repositories.keyset import seek
from inkwell.services.cursor import SortKey
from inkwell.services.pagination import Direction, Source
from inkwell.services.visibility import visible_to

__all__ = ["StarRepository"]

logger = logging.getLogger(__name__)


class StarRepository:
    """Star edges between profiles and posts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str, post_id: str) -> Star | None:
        """Return the star of ``profile_id`` on ``post_id`` if present."""
        return self.session.get(Star, {"post_id": post_id, "profile_id": profile_id})

    def create(self, profile_id: str, post_id: str) -> Star:
        """Insert a star.

        Raises:
            AlreadyStarredError: If the pair already exists in the store.
        """
        star = Star(profile_id=profile_id, post_id=post_id)
        try:
            with self.session.begin_nested():
                self.session.add(star)
        except IntegrityError as err:
            logger.warning("Star of %s on %s hit the unique constraint", profile_id, post_id)
            raise AlreadyStarredError(post_id) from err
        return star

    def delete(self, profile_id: str, post_id: str) -> bool:
        """Remove a star; return whether one was there to remove."""
        stmt = delete(Star).where(Star.profile_id == profile_id, Star.post_id == post_id)
        return self.session.execute(stmt).rowcount > 0

    def by_post(self, post_id: str) -> Source[tuple[Profile, object]]:
        """Profiles that starred ``post_id``, most recent first."""
        base = (
            select(Profile, Star.created_at)
            .join(Star, Star.profile_id == Profile.id)
            .where(Star.post_id == post_id)
        )
        columns = [Star.created_at, Star.profile_id]

        def fetch(key: SortKey | None, limit: int | None, direction: Direction):
            stmt = seek(base, columns, key, limit, direction)
            return [
                ((profile, starred_at), (starred_at, profile.id))
                for profile, starred_at in self.session.execute(stmt).all()
            ]

        def count() -> int:
            stmt = select(func.count()).select_from(Star).where(Star.post_id == post_id)
            return self.session.execute(stmt).scalar_one()

        return Source(fetch=fetch, count=count)

    def by_profile(
        self,
        profile_id: str,
        *,
        viewer_id: str | None,
        privacy: Privacy | None,
    ) -> Source[tuple[Post, object]]:
        """Posts starred by ``profile_id`` that ``viewer_id`` may see, most recent first.

        Privacy applies to the starred post; ``privacy`` narrows it further.
        """
        conditions = [Star.profile_id == profile_id, visible_to(viewer_id)]
        if privacy is not None:
            conditions.append(Post.privacy == privacy)
        base = select(Post, Star.created_at).join(Star, Star.post_id == Post.id).where(*conditions)
        columns = [Star.created_at, Star.post_id]

        def fetch(key: SortKey | None, limit: int | None, direction: Direction):
            stmt = seek(base, columns, key, limit, direction)
            return [
                ((post, starred_at), (starred_at, post.id))
                for post, starred_at in self.session.execute(stmt).all()
            ]

        def count() -> int:
            stmt = (
                select(func.count())
                .select_from(Star)
                .join(Post, Star.post_id == Post.id)
                .where(*conditions)
            )
            return self.session.execute(stmt).scalar_one()

        return Source(fetch=fetch, count=count)
