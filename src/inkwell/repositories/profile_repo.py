"""Data access helpers for profiles."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.errors import InvalidInputError
from inkwell.models.profile import Profile
from inkwell.repositories.keyset import seek
from inkwell.services.cursor import SortKey
from inkwell.services.pagination import Direction, Source

__all__ = ["ProfileRepository"]


class ProfileRepository:
    """CRUD access to profiles."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str) -> Profile | None:
        """Return a profile by identifier."""
        return self.session.get(Profile, profile_id)

    def exists(self, profile_id: str) -> bool:
        """Return whether a profile exists for ``profile_id``."""
        stmt = select(Profile.id).where(Profile.id == profile_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def create(self, profile_id: str, values: dict[str, Any]) -> Profile:
        """Persist a new profile.

        Raises:
            InvalidInputError: If a profile already exists for the identity.
        """
        profile = Profile(id=profile_id, **values)
        try:
            with self.session.begin_nested():
                self.session.add(profile)
        except IntegrityError as err:
            raise InvalidInputError(f"Profile {profile_id} already exists") from err
        return profile

    def update(self, profile: Profile, values: dict[str, Any]) -> Profile:
        """Apply partial updates to an existing profile."""
        for key, value in values.items():
            setattr(profile, key, value)
        self.session.flush()
        return profile

    def delete(self, profile: Profile) -> None:
        """Remove a profile; everything it owns cascades in the store."""
        self.session.delete(profile)
        self.session.flush()

    def all(self) -> Source[Profile]:
        """Every profile, newest first."""
        columns = [Profile.created_at, Profile.id]

        def fetch(key: SortKey | None, limit: int | None, direction: Direction):
            stmt = seek(select(Profile), columns, key, limit, direction)
            return [(profile, (profile.created_at, profile.id)) for profile in self.session.execute(stmt).scalars()]

        def count() -> int:
            return self.session.execute(select(func.count()).select_from(Profile)).scalar_one()

        return Source(fetch=fetch, count=count)
