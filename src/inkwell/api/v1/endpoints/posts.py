# src/inkwell/api/v1/endpoints/posts.py
"""Post and star endpoints for the Inkwell API."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query, status

from inkwell.api.v1.dependencies import CallerDep, PageDep, SessionDep, ViewerDep
from inkwell.models.post import PostSort, Privacy
from inkwell.schemas.common import Connection
from inkwell.schemas.post import (
    PostCreate,
    PostResponse,
    PostUpdate,
    StargazerResponse,
    StarResponse,
)
from inkwell.services.post_service import PostFilters, PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=Connection[PostResponse])
def list_posts(
    db: SessionDep,
    viewer_id: ViewerDep,
    page: PageDep,
    profile_id: Annotated[str | None, Query(description="Only posts by this profile")] = None,
    privacy: Annotated[Privacy | None, Query(description="Privacy level; only honoured for the owner")] = None,
    language: str | None = None,
    q: Annotated[str | None, Query(description="Case-insensitive text search")] = None,
    created_from: Annotated[datetime | None, Query(alias="from")] = None,
    created_to: Annotated[datetime | None, Query(alias="to")] = None,
    sort: PostSort = PostSort.RECENT,
) -> Connection[PostResponse]:
    """List posts visible to the caller, newest first."""
    filters = PostFilters(
        profile_id=profile_id,
        privacy=privacy,
        language=language,
        query=q,
        created_from=created_from,
        created_to=created_to,
        sort=sort,
    )
    return PostService(db).find_all(viewer_id, page, filters)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(post_data: PostCreate, db: SessionDep, caller_id: CallerDep) -> PostResponse:
    """Create a new post owned by the caller."""
    return PostService(db).create(caller_id, post_data)


@router.get("/trending", response_model=Connection[PostResponse])
def list_trending_posts(
    db: SessionDep,
    page: PageDep,
    profile_id: str | None = None,
    language: str | None = None,
) -> Connection[PostResponse]:
    """List public posts ranked by recent views."""
    return PostService(db).find_trending(page, profile_id=profile_id, language=language)


@router.get("/lookup", response_model=PostResponse)
def lookup_post(
    db: SessionDep,
    viewer_id: ViewerDep,
    post_id: str | None = None,
    slug: str | None = None,
) -> PostResponse:
    """Find a single post by id or slug."""
    return PostService(db).find(viewer_id, post_id=post_id, slug=slug)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: SessionDep, viewer_id: ViewerDep) -> PostResponse:
    """Get a specific post by ID."""
    return PostService(db).find(viewer_id, post_id=post_id)


@router.patch("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    db: SessionDep,
    caller_id: CallerDep,
) -> PostResponse:
    """Update a post owned by the caller."""
    return PostService(db).update(caller_id, post_id, post_data)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: str, db: SessionDep, caller_id: CallerDep) -> None:
    """Delete a post owned by the caller."""
    PostService(db).delete(caller_id, post_id)


@router.post("/{post_id}/star", response_model=StarResponse, status_code=status.HTTP_201_CREATED)
def star_post(post_id: str, db: SessionDep, caller_id: CallerDep) -> StarResponse:
    return PostService(db).star(caller_id, post_id)


@router.delete("/{post_id}/star", response_model=StarResponse)
def unstar_post(post_id: str, db: SessionDep, caller_id: CallerDep) -> StarResponse:
    return PostService(db).unstar(caller_id, post_id)


@router.get("/{post_id}/stars", response_model=Connection[StargazerResponse])
def list_stargazers(
    post_id: str,
    db: SessionDep,
    viewer_id: ViewerDep,
    page: PageDep,
) -> Connection[StargazerResponse]:
    """List profiles that starred a post, most recent first."""
    return PostService(db).stargazers(viewer_id, post_id, page)
