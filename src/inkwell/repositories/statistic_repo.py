"""Per-day view counters and their aggregates."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.db.time import utctoday
from inkwell.models.statistic import PostStatistic, ProfileStatistic

__all__ = ["StatisticRepository"]

logger = logging.getLogger(__name__)


class StatisticRepository:
    """Atomic increments and summed reads of view statistics."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def register_post_view(self, post_id: str) -> None:
        """Add one view to today's counter of ``post_id``."""
        self._increment(PostStatistic, PostStatistic.post_id, PostStatistic.post_views, post_id)

    def register_profile_view(self, profile_id: str) -> None:
        """Add one view to today's counter of ``profile_id``."""
        self._increment(
            ProfileStatistic, ProfileStatistic.profile_id, ProfileStatistic.profile_views, profile_id
        )

    def post_views(self, post_id: str) -> int:
        """Return all-time views of ``post_id``."""
        stmt = select(func.coalesce(func.sum(PostStatistic.post_views), 0)).where(
            PostStatistic.post_id == post_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def profile_views(self, profile_id: str) -> int:
        """Return all-time views of ``profile_id``."""
        stmt = select(func.coalesce(func.sum(ProfileStatistic.profile_views), 0)).where(
            ProfileStatistic.profile_id == profile_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def post_view_ranking(self, since: date) -> list[tuple[str, int]]:
        """Return ``(post_id, views)`` summed from ``since`` on, most viewed first.

        Equal sums are ordered by post id.
        """
        views = func.sum(PostStatistic.post_views).label("views")
        stmt = (
            select(PostStatistic.post_id, views)
            .where(PostStatistic.day >= since)
            .group_by(PostStatistic.post_id)
            .order_by(desc(views), PostStatistic.post_id.asc())
        )
        return [(post_id, int(total)) for post_id, total in self.session.execute(stmt).all()]

    def _increment(self, model: Any, key_column: Any, counter: Any, entity_id: str) -> None:
        day = utctoday()
        stmt = (
            update(model)
            .where(key_column == entity_id, model.day == day)
            .values({counter: counter + 1})
            .execution_options(synchronize_session=False)
        )
        if self.session.execute(stmt).rowcount:
            return
        try:
            with self.session.begin_nested():
                self.session.add(model(**{key_column.key: entity_id, "day": day, counter.key: 1}))
        except IntegrityError:
            # Another request created today's row first.
            logger.debug("Counter row for %s on %s created concurrently", entity_id, day)
            self.session.execute(stmt)
