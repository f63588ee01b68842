# src/inkwell/models/star.py
"""Models capturing stars (likes) on posts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow


class Star(Base):
    """A profile starring a post."""

    __tablename__ = "star"
    __table_args__ = (
        Index("ix_star_profile_created", "profile_id", "created_at"),
        Index("ix_star_post_created", "post_id", "created_at"),
    )

    # Composite primary key prevents duplicate stars from the same profile.
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    profile_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("profile.id", ondelete="CASCADE"),
        primary_key=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
