# src/inkwell/models/statistic.py
"""Per-day view counters for posts and profiles."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utctoday


class PostStatistic(Base):
    """View counter of one post for one UTC day."""

    __tablename__ = "post_statistic"
    __table_args__ = (
        UniqueConstraint("post_id", "day", name="uq_post_statistic_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, default=utctoday)
    post_views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProfileStatistic(Base):
    """View counter of one profile for one UTC day."""

    __tablename__ = "profile_statistic"
    __table_args__ = (
        UniqueConstraint("profile_id", "day", name="uq_profile_statistic_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, default=utctoday)
    profile_views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
