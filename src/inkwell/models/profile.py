# src/inkwell/models/profile.py
"""SQLAlchemy model for member profiles."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base
from inkwell.db.time import utcnow


class Profile(Base):
    """Public face of an identity.

    The primary key is the caller identity resolved upstream, so there is at
    most one profile per identity.
    """

    __tablename__ = "profile"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
