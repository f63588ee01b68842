# src/inkwell/schemas/profile.py
"""Profile and follow schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileCreate(BaseModel):
    """Schema for creating the caller's profile."""

    bio: str | None = Field(None, max_length=5000)
    language: str = Field("en", min_length=2, max_length=16)


class ProfileUpdate(BaseModel):
    """Schema for partial profile updates."""

    bio: str | None = Field(None, max_length=5000)
    language: str | None = Field(None, min_length=2, max_length=16)

    @field_validator("language")
    @classmethod
    def _reject_null_language(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("language cannot be null")
        return value


class ProfileResponse(BaseModel):
    """Schema for profile information returned by the API."""

    id: str
    bio: str | None
    language: str
    created_at: datetime
    updated_at: datetime
    views: int | None = None

    model_config = ConfigDict(from_attributes=True)


class FollowResponse(BaseModel):
    """A follow edge as stored."""

    id: str
    follower_id: str
    followed_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FollowedProfileResponse(BaseModel):
    """Embedded follow target inside an activity entry."""

    created_at: datetime
    followed: ProfileResponse
