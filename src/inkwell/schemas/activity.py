# src/inkwell/schemas/activity.py
"""Activity feed schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from inkwell.models.activity import ActivityType
from inkwell.schemas.post import PostResponse
from inkwell.schemas.profile import FollowedProfileResponse


class ActivityResponse(BaseModel):
    """One de-duplicated feed entry.

    ``post`` is null when the referenced post was deleted or is hidden from
    the caller; the entry itself is still listed.
    """

    type: ActivityType
    created_at: datetime = Field(..., description="Latest occurrence of this entry")
    post: PostResponse | None = None
    follow: FollowedProfileResponse | None = None
