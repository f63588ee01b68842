"""Service-level operations on profiles and follow edges."""
from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from inkwell.core.errors import (
    AlreadyFollowedError,
    InvalidInputError,
    NotFollowedError,
    NotFoundError,
)
from inkwell.models.post import Privacy
from inkwell.models.profile import Profile
from inkwell.repositories import (
    ActivityRepository,
    FollowRepository,
    ProfileRepository,
    StarRepository,
    StatisticRepository,
)
from inkwell.schemas.activity import ActivityResponse
from inkwell.schemas.common import Connection, ConnectionArgs
from inkwell.schemas.post import PostResponse, StarredPostResponse
from inkwell.schemas.profile import (
    FollowResponse,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
)
from inkwell.services.feed import ActivityFeed
from inkwell.services.pagination import paginate
from inkwell.services.post_service import PostFilters, PostService, require_caller, to_post_out
from inkwell.services.visibility import effective_privacy

__all__ = ["ProfileService"]

logger = logging.getLogger(__name__)


def to_profile_out(profile: Profile, **extra: object) -> ProfileResponse:
    return ProfileResponse.model_validate(profile).model_copy(update=extra)


class ProfileService:
    """Profiles, follows and the relations hanging off a profile."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.profiles = ProfileRepository(session)
        self.follows = FollowRepository(session)
        self.stars = StarRepository(session)
        self.activity = ActivityRepository(session)
        self.statistics = StatisticRepository(session)

    def create(self, caller_id: str | None, data: ProfileCreate) -> ProfileResponse:
        """Create the caller's profile, keyed by their identity."""
        caller_id = require_caller(caller_id)
        if self.profiles.exists(caller_id):
            raise InvalidInputError(f"Profile {caller_id} already exists")
        profile = self.profiles.create(caller_id, data.model_dump())
        self.activity.create_profile_activity(profile.id)
        self.session.commit()
        logger.info("Created profile %s", profile.id)
        return to_profile_out(profile)

    def update(self, caller_id: str | None, data: ProfileUpdate) -> ProfileResponse:
        profile = self._require_own_profile(caller_id)
        self.profiles.update(profile, data.model_dump(exclude_unset=True))
        self.session.commit()
        logger.info("Updated profile %s", profile.id)
        return to_profile_out(profile)

    def delete(self, caller_id: str | None) -> bool:
        """Delete the caller's profile together with everything it owns."""
        profile = self._require_own_profile(caller_id)
        self.profiles.delete(profile)
        self.session.commit()
        logger.info("Deleted profile %s", caller_id)
        return True

    def find(self, caller_id: str | None, profile_id: str | None = None) -> ProfileResponse:
        """Return a profile; without ``profile_id`` the caller's own.

        Reads by anyone but the owner count as a view.
        """
        if profile_id is None:
            profile_id = require_caller(caller_id)
        profile = self._get(profile_id)
        if profile.id != caller_id:
            self.statistics.register_profile_view(profile.id)
            self.session.commit()
        return to_profile_out(profile, views=self.statistics.profile_views(profile.id))

    def find_all(self, args: ConnectionArgs) -> Connection[ProfileResponse]:
        return paginate(self.profiles.all(), args).map(to_profile_out)

    def follow(self, caller_id: str | None, profile_id: str) -> FollowResponse:
        """Follow another profile."""
        follower = self._require_own_profile(caller_id)
        self._get(profile_id)
        if follower.id == profile_id:
            raise InvalidInputError("A profile cannot follow itself")

        if self.follows.get(follower.id, profile_id) is not None:
            raise AlreadyFollowedError(profile_id)
        follow = self.follows.create(follower.id, profile_id)
        self.activity.create_follow_activity(follower.id, follow.id)
        self.session.commit()
        logger.info("Profile %s followed %s", follower.id, profile_id)
        return FollowResponse.model_validate(follow)

    def unfollow(self, caller_id: str | None, profile_id: str) -> FollowResponse:
        """Stop following a profile."""
        follower = self._require_own_profile(caller_id)
        self._get(profile_id)

        follow = self.follows.get(follower.id, profile_id)
        if follow is None:
            raise NotFollowedError(profile_id)
        result = FollowResponse.model_validate(follow)
        if not self.follows.delete(follower.id, profile_id):
            raise NotFollowedError(profile_id)
        self.session.commit()
        logger.info("Profile %s unfollowed %s", follower.id, profile_id)
        return result

    def posts(
        self,
        caller_id: str | None,
        profile_id: str,
        args: ConnectionArgs,
        filters: PostFilters | None = None,
    ) -> Connection[PostResponse]:
        """Posts authored by a profile, as the caller may see them."""
        self._get(profile_id)
        filters = replace(filters or PostFilters(), profile_id=profile_id)
        return PostService(self.session).find_all(caller_id, args, filters)

    def starred(
        self,
        caller_id: str | None,
        profile_id: str,
        args: ConnectionArgs,
        privacy: Privacy | None = None,
    ) -> Connection[StarredPostResponse]:
        """Posts a profile starred.

        Every row is checked against the caller on its own, since starred
        posts belong to many owners. A requested privacy level only narrows
        the result when the caller looks at their own stars.
        """
        self._get(profile_id)
        constraint = effective_privacy(caller_id, profile_id, privacy)
        if constraint == Privacy.PUBLIC and privacy is None:
            # Visibility is enforced per row below; do not hide the caller's
            # own private posts starred by someone else.
            constraint = None
        source = self.stars.by_profile(profile_id, viewer_id=caller_id, privacy=constraint)
        return paginate(source, args).map(
            lambda node: StarredPostResponse(post=to_post_out(node[0]), created_at=node[1])
        )

    def followers(self, profile_id: str, args: ConnectionArgs) -> Connection[ProfileResponse]:
        self._get(profile_id)
        return paginate(self.follows.followers(profile_id), args).map(to_profile_out)

    def following(self, profile_id: str, args: ConnectionArgs) -> Connection[ProfileResponse]:
        self._get(profile_id)
        return paginate(self.follows.following(profile_id), args).map(to_profile_out)

    def activity_feed(
        self,
        caller_id: str | None,
        profile_id: str,
        args: ConnectionArgs,
    ) -> Connection[ActivityResponse]:
        """De-duplicated activity of a profile, newest first."""
        self._get(profile_id)
        return ActivityFeed(self.session).connection(caller_id, profile_id, args)

    def _get(self, profile_id: str) -> Profile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise NotFoundError(f"Profile {profile_id} not found")
        return profile

    def _require_own_profile(self, caller_id: str | None) -> Profile:
        caller_id = require_caller(caller_id)
        profile = self.profiles.get(caller_id)
        if profile is None:
            raise NotFoundError("Profile not found; create a profile first")
        return profile
