# src/inkwell/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkwell.models.post import Privacy
from inkwell.schemas.profile import ProfileResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=255, description="Post title; the slug is derived from it")
    avatar_url: str | None = Field(None, max_length=2048)
    summary: str | None = Field(None, max_length=5000)
    content: dict[str, Any] | list[Any] | None = Field(
        None, description="Structured rich-text document"
    )
    privacy: Privacy = Field(Privacy.PUBLIC, description="Visibility of the post")
    language: str = Field("en", min_length=2, max_length=16)


class PostUpdate(BaseModel):
    """Schema for partial post updates; unset fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=255)
    avatar_url: str | None = Field(None, max_length=2048)
    summary: str | None = Field(None, max_length=5000)
    content: dict[str, Any] | list[Any] | None = None
    privacy: Privacy | None = None
    language: str | None = Field(None, min_length=2, max_length=16)

    @field_validator("title", "privacy", "language")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("field cannot be null")
        return value


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    slug: str
    title: str
    avatar_url: str | None
    summary: str | None
    content: Any | None
    privacy: Privacy
    language: str
    profile_id: str
    created_at: datetime
    updated_at: datetime
    # Text around the search hit, only set for searched listings.
    matching_query: str | None = None
    views: int | None = None
    star_count: int | None = None

    model_config = ConfigDict(from_attributes=True)


class StarResponse(BaseModel):
    """A star as stored."""

    post_id: str
    profile_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StargazerResponse(BaseModel):
    """A profile that starred a post, with the time of the star."""

    profile: ProfileResponse
    created_at: datetime


class StarredPostResponse(BaseModel):
    """A post starred by a profile, with the time of the star."""

    post: PostResponse
    created_at: datetime
