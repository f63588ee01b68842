# src/inkwell/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .activity import ActivityResponse
from .common import Connection, ConnectionArgs, Edge, PageInfo
from .post import (
    PostCreate,
    PostResponse,
    PostUpdate,
    StargazerResponse,
    StarredPostResponse,
    StarResponse,
)
from .profile import (
    FollowedProfileResponse,
    FollowResponse,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
)

__all__ = [
    "ActivityResponse",
    "Connection", "ConnectionArgs", "Edge", "PageInfo",
    "PostCreate", "PostResponse", "PostUpdate",
    "StargazerResponse", "StarredPostResponse", "StarResponse",
    "FollowedProfileResponse", "FollowResponse",
    "ProfileCreate", "ProfileResponse", "ProfileUpdate",
]
