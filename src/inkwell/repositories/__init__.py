"""Relation query adapters over the SQLAlchemy session."""

from .activity_repo import ActivityRepository
from .follow_repo import FollowRepository
from .post_repo import PostQuery, PostRepository, PostSort
from .profile_repo import ProfileRepository
from .star_repo import StarRepository
from .statistic_repo import StatisticRepository

__all__ = [
    "ActivityRepository",
    "FollowRepository",
    "PostQuery", "PostRepository", "PostSort",
    "ProfileRepository",
    "StarRepository",
    "StatisticRepository",
]
