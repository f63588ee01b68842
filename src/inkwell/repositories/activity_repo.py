"""Data access helpers for the activity log."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Row, func, select
from sqlalchemy.orm import Session

from inkwell.models.activity import Activity, ActivityType
from inkwell.repositories.keyset import seek
from inkwell.services.cursor import SortKey
from inkwell.services.pagination import Direction, Source

__all__ = ["ActivityRepository"]


class ActivityRepository:
    """Append-only writes and grouped reads over the activity log."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(
        self,
        profile_id: str,
        type_: ActivityType,
        *,
        post_id: str | None = None,
        follow_id: str | None = None,
    ) -> Activity:
        """Record a new activity entry."""
        activity = Activity(profile_id=profile_id, type=type_, post_id=post_id, follow_id=follow_id)
        self.session.add(activity)
        self.session.flush()
        return activity

    def create_profile_activity(self, profile_id: str) -> Activity:
        return self.append(profile_id, ActivityType.PROFILE_CREATE)

    def create_blog_activity(self, profile_id: str, post_id: str) -> Activity:
        return self.append(profile_id, ActivityType.BLOG_CREATE, post_id=post_id)

    def create_star_activity(self, profile_id: str, post_id: str, *, starred: bool) -> Activity:
        type_ = ActivityType.STAR_STAR if starred else ActivityType.STAR_UNSTAR
        return self.append(profile_id, type_, post_id=post_id)

    def create_follow_activity(self, profile_id: str, follow_id: str) -> Activity:
        return self.append(profile_id, ActivityType.FOLLOW_FOLLOW, follow_id=follow_id)

    def feed(self, profile_id: str) -> Source[Row[Any]]:
        """Distinct ``(type, post_id, follow_id)`` groups of a profile, newest first.

        Each group is positioned at its latest occurrence; the newest row id
        breaks ties.
        """
        groups = (
            select(
                Activity.type,
                Activity.post_id,
                Activity.follow_id,
                func.max(Activity.created_at).label("created_at"),
                func.max(Activity.id).label("anchor_id"),
            )
            .where(Activity.profile_id == profile_id)
            .group_by(Activity.type, Activity.post_id, Activity.follow_id)
            .subquery("activity_group")
        )
        columns = [groups.c.created_at, groups.c.anchor_id]

        def fetch(key: SortKey | None, limit: int | None, direction: Direction):
            stmt = seek(select(groups), columns, key, limit, direction)
            return [(row, (row.created_at, row.anchor_id)) for row in self.session.execute(stmt).all()]

        def count() -> int:
            # Distinct combinations, not raw log rows.
            return self.session.execute(select(func.count()).select_from(groups)).scalar_one()

        return Source(fetch=fetch, count=count)
