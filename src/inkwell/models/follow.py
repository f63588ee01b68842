# src/inkwell/models/follow.py
"""Directed follow edges between profiles."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow


class Follow(Base):
    """``follower_id`` follows ``followed_id``; the reverse edge is independent."""

    __tablename__ = "follow"
    __table_args__ = (
        UniqueConstraint("follower_id", "followed_id", name="uq_follow_pair"),
        Index("ix_follow_followed_created", "followed_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    follower_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
    )
    followed_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
