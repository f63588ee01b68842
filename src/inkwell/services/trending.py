"""Trending posts ranked by recent views."""
from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.db.time import utctoday
from inkwell.models.post import Post, Privacy
from inkwell.repositories import PostRepository, StatisticRepository
from inkwell.schemas.common import Connection, ConnectionArgs
from inkwell.services.pagination import paginate, sequence_source

logger = logging.getLogger(__name__)


def trending_posts(
    session: Session,
    args: ConnectionArgs,
    *,
    profile_id: str | None = None,
    language: str | None = None,
    window_days: int | None = None,
) -> Connection[Post]:
    """Return public posts ordered by views summed over the trailing window.

    Ranking happens on the statistics table first; the ranked ids are then
    resolved to posts, filtered, and paginated by rank position. Posts with no
    views in the window never appear.
    """
    window = window_days if window_days is not None else settings.trending_window_days
    since = utctoday() - timedelta(days=window)

    ranking = StatisticRepository(session).post_view_ranking(since)
    ranked_ids = [post_id for post_id, _ in ranking]
    posts = {
        post.id: post
        for post in PostRepository(session).get_many(
            ranked_ids,
            privacy=Privacy.PUBLIC,
            profile_id=profile_id,
            language=language,
        )
    }
    ranked = [posts[post_id] for post_id in ranked_ids if post_id in posts]
    logger.debug("Trending since %s: %d ranked, %d eligible", since, len(ranked_ids), len(ranked))

    source = sequence_source(ranked, key=lambda position, post: (position, post.id))
    return paginate(source, args)
