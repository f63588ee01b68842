# src/inkwell/api/v1/endpoints/profiles.py
"""Profile, follow and activity endpoints for the Inkwell API."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query, status

from inkwell.api.v1.dependencies import CallerDep, PageDep, SessionDep, ViewerDep
from inkwell.models.post import PostSort, Privacy
from inkwell.schemas.activity import ActivityResponse
from inkwell.schemas.common import Connection
from inkwell.schemas.post import PostResponse, StarredPostResponse
from inkwell.schemas.profile import (
    FollowResponse,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
)
from inkwell.services.post_service import PostFilters
from inkwell.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=Connection[ProfileResponse])
def list_profiles(db: SessionDep, page: PageDep) -> Connection[ProfileResponse]:
    """List all profiles, newest first."""
    return ProfileService(db).find_all(page)


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def create_profile(
    profile_data: ProfileCreate,
    db: SessionDep,
    caller_id: CallerDep,
) -> ProfileResponse:
    """Create the caller's profile."""
    return ProfileService(db).create(caller_id, profile_data)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(db: SessionDep, caller_id: CallerDep) -> ProfileResponse:
    """Return the caller's own profile."""
    return ProfileService(db).find(caller_id)


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    profile_data: ProfileUpdate,
    db: SessionDep,
    caller_id: CallerDep,
) -> ProfileResponse:
    return ProfileService(db).update(caller_id, profile_data)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_my_profile(db: SessionDep, caller_id: CallerDep) -> None:
    """Delete the caller's profile and everything it owns."""
    ProfileService(db).delete(caller_id)


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(profile_id: str, db: SessionDep, viewer_id: ViewerDep) -> ProfileResponse:
    return ProfileService(db).find(viewer_id, profile_id)


@router.post("/{profile_id}/follow", response_model=FollowResponse, status_code=status.HTTP_201_CREATED)
def follow_profile(profile_id: str, db: SessionDep, caller_id: CallerDep) -> FollowResponse:
    return ProfileService(db).follow(caller_id, profile_id)


@router.delete("/{profile_id}/follow", response_model=FollowResponse)
def unfollow_profile(profile_id: str, db: SessionDep, caller_id: CallerDep) -> FollowResponse:
    return ProfileService(db).unfollow(caller_id, profile_id)


@router.get("/{profile_id}/posts", response_model=Connection[PostResponse])
def list_profile_posts(
    profile_id: str,
    db: SessionDep,
    viewer_id: ViewerDep,
    page: PageDep,
    privacy: Annotated[Privacy | None, Query(description="Privacy level; only honoured for the owner")] = None,
    language: str | None = None,
    q: str | None = None,
    created_from: Annotated[datetime | None, Query(alias="from")] = None,
    created_to: Annotated[datetime | None, Query(alias="to")] = None,
    sort: PostSort = PostSort.RECENT,
) -> Connection[PostResponse]:
    """List posts authored by a profile, as the caller may see them."""
    filters = PostFilters(
        privacy=privacy,
        language=language,
        query=q,
        created_from=created_from,
        created_to=created_to,
        sort=sort,
    )
    return ProfileService(db).posts(viewer_id, profile_id, page, filters)


@router.get("/{profile_id}/starred", response_model=Connection[StarredPostResponse])
def list_starred_posts(
    profile_id: str,
    db: SessionDep,
    viewer_id: ViewerDep,
    page: PageDep,
    privacy: Privacy | None = None,
) -> Connection[StarredPostResponse]:
    """List posts a profile starred, most recent star first."""
    return ProfileService(db).starred(viewer_id, profile_id, page, privacy)


@router.get("/{profile_id}/followers", response_model=Connection[ProfileResponse])
def list_followers(profile_id: str, db: SessionDep, page: PageDep) -> Connection[ProfileResponse]:
    return ProfileService(db).followers(profile_id, page)


@router.get("/{profile_id}/following", response_model=Connection[ProfileResponse])
def list_following(profile_id: str, db: SessionDep, page: PageDep) -> Connection[ProfileResponse]:
    return ProfileService(db).following(profile_id, page)


@router.get("/{profile_id}/activity", response_model=Connection[ActivityResponse])
def list_activity(
    profile_id: str,
    db: SessionDep,
    viewer_id: ViewerDep,
    page: PageDep,
) -> Connection[ActivityResponse]:
    """De-duplicated activity of a profile, newest first."""
    return ProfileService(db).activity_feed(viewer_id, profile_id, page)
