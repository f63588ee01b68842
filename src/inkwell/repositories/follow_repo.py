"""Data access helpers for follow edges."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.errors import AlreadyFollowedError
from inkwell.models.follow import Follow
from inkwell.models.profile import Profile
from inkwell.repositories.keyset import seek
from inkwell.services.cursor import SortKey
from inkwell.services.pagination import Direction, Source

__all__ = ["FollowRepository"]

logger = logging.getLogger(__name__)


class FollowRepository:
    """Directed follow edges."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, follower_id: str, followed_id: str) -> Follow | None:
        """Return the edge ``follower_id -> followed_id`` if present."""
        stmt = select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.followed_id == followed_id,
        )
        return self.session.execute(stmt).scalars().first()

    def create(self, follower_id: str, followed_id: str) -> Follow:
        """Insert a follow edge.

        Raises:
            AlreadyFollowedError: If the ordered pair already exists in the store.
        """
        follow = Follow(follower_id=follower_id, followed_id=followed_id)
        try:
            with self.session.begin_nested():
                self.session.add(follow)
        except IntegrityError as err:
            logger.warning("Follow %s -> %s hit the unique constraint", follower_id, followed_id)
            raise AlreadyFollowedError(followed_id) from err
        return follow

    def delete(self, follower_id: str, followed_id: str) -> bool:
        """Remove a follow edge; return whether one was there to remove."""
        stmt = delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.followed_id == followed_id,
        )
        return self.session.execute(stmt).rowcount > 0

    def get_many_with_followed(self, follow_ids: Sequence[str]) -> dict[str, tuple[Follow, Profile]]:
        """Return follow edges keyed by id, each with the followed profile."""
        if not follow_ids:
            return {}
        stmt = (
            select(Follow, Profile)
            .join(Profile, Profile.id == Follow.followed_id)
            .where(Follow.id.in_(follow_ids))
        )
        return {follow.id: (follow, profile) for follow, profile in self.session.execute(stmt).all()}

    def followers(self, profile_id: str) -> Source[Profile]:
        """Profiles following ``profile_id``, most recent first."""
        return self._edges(
            join_on=Follow.follower_id,
            scope=Follow.followed_id == profile_id,
        )

    def following(self, profile_id: str) -> Source[Profile]:
        """Profiles followed by ``profile_id``, most recent first."""
        return self._edges(
            join_on=Follow.followed_id,
            scope=Follow.follower_id == profile_id,
        )

    def _edges(self, *, join_on, scope) -> Source[Profile]:
        base = select(Profile, Follow.created_at, Follow.id).join(Follow, join_on == Profile.id).where(scope)
        columns = [Follow.created_at, Follow.id]

        def fetch(key: SortKey | None, limit: int | None, direction: Direction):
            stmt = seek(base, columns, key, limit, direction)
            return [
                (profile, (followed_at, follow_id))
                for profile, followed_at, follow_id in self.session.execute(stmt).all()
            ]

        def count() -> int:
            stmt = select(func.count()).select_from(Follow).where(scope)
            return self.session.execute(stmt).scalar_one()

        return Source(fetch=fetch, count=count)
