# src/inkwell/models/post.py
"""SQLAlchemy models for posts and related attributes."""

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from inkwell.core.settings import settings
from inkwell.db.session import Base
from inkwell.db.time import utcnow
from inkwell.services.matching import document_text


class Privacy(enum.StrEnum):
    """Visibility level of a post."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    FRIENDS = "FRIENDS"


class PostSort(enum.StrEnum):
    """Secondary ordering of post listings."""

    RECENT = "recent"
    STARS = "stars"


def _new_id() -> str:
    return str(uuid.uuid4())


class Post(Base):
    """Blog post owned by a single profile."""

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_profile_created", "profile_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # Derived from the title; collisions are resolved with a numeric suffix.
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Structured rich-text document, stored as JSON and never interpreted here.
    content: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    # String leaves of content, kept in step with it for store-side search.
    content_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    privacy: Mapped[Privacy] = mapped_column(
        Enum(Privacy, name="privacy"),
        nullable=False,
        default=Privacy.PUBLIC,
    )
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")

    # Owner is fixed at creation time.
    profile_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @validates("content")
    def _sync_content_text(self, key: str, value: Any) -> Any:
        self.content_text = document_text(value, settings.document_max_depth)
        return value
