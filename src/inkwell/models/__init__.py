# src/inkwell/models/__init__.py
"""SQLAlchemy models for the Inkwell application."""

from .activity import Activity, ActivityType
from .follow import Follow
from .post import Post, PostSort, Privacy
from .profile import Profile
from .star import Star
from .statistic import PostStatistic, ProfileStatistic

__all__ = [
    "Activity", "ActivityType",
    "Follow",
    "Post", "PostSort", "Privacy",
    "Profile",
    "Star",
    "PostStatistic", "ProfileStatistic",
]
