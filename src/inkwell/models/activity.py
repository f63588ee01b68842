# src/inkwell/models/activity.py
"""Append-only activity log."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow


class ActivityType(enum.StrEnum):
    """Kinds of events recorded in a profile's activity log."""

    PROFILE_CREATE = "profile_create"
    BLOG_CREATE = "blog_create"
    STAR_STAR = "star_star"
    STAR_UNSTAR = "star_unstar"
    FOLLOW_FOLLOW = "follow_follow"


class Activity(Base):
    """Single log entry; rows are only ever inserted."""

    __tablename__ = "activity"
    __table_args__ = (
        Index("ix_activity_profile_group", "profile_id", "type", "post_id", "follow_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[ActivityType] = mapped_column(
        Enum(
            ActivityType,
            name="activity_type",
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )

    # Exactly one of these is set for blog_*, star_* and follow_* entries.
    # Plain references: the id outlives its target so that entries stay distinct.
    post_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    follow_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
