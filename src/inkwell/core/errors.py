"""Domain error taxonomy.

Every error raised by the service layer derives from :class:`ServiceError` and
carries a stable machine-readable ``code`` plus the HTTP status it maps to.
The API layer renders them through a single exception handler.
"""

from __future__ import annotations

from fastapi import status

__all__ = [
    "ServiceError",
    "InvalidInputError",
    "NotFoundError",
    "AuthenticationError",
    "OwnershipError",
    "AlreadyStarredError",
    "NotStarredError",
    "AlreadyFollowedError",
    "NotFollowedError",
    "SourceUnavailableError",
    "MalformedCursorError",
    "InvalidPaginationArgsError",
]


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    code: str = "SERVICE_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the JSON body rendered for this error."""
        return {"detail": self.message, "code": self.code}


class InvalidInputError(ServiceError):
    code = "INVALID_INPUT"


class NotFoundError(ServiceError):
    # Also used for rows that exist but are hidden from the caller.
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(ServiceError):
    code = "AUTHENTICATION_ERROR"
    status_code = status.HTTP_401_UNAUTHORIZED


class OwnershipError(ServiceError):
    code = "OWNERSHIP_ERROR"
    status_code = status.HTTP_403_FORBIDDEN


class AlreadyStarredError(ServiceError):
    code = "POST_ALREADY_STARRED"

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Post with id {post_id} is already starred")
        self.post_id = post_id


class NotStarredError(ServiceError):
    code = "POST_NOT_STARRED"

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Post with id {post_id} is not starred")
        self.post_id = post_id


class AlreadyFollowedError(ServiceError):
    code = "PROFILE_ALREADY_FOLLOWED"

    def __init__(self, profile_id: str) -> None:
        super().__init__(f"Profile with id {profile_id} is already followed")
        self.profile_id = profile_id


class NotFollowedError(ServiceError):
    code = "PROFILE_NOT_FOLLOWED"

    def __init__(self, profile_id: str) -> None:
        super().__init__(f"Profile with id {profile_id} is not followed")
        self.profile_id = profile_id


class SourceUnavailableError(ServiceError):
    """The backing store failed; never retried by the service layer."""

    code = "SOURCE_UNAVAILABLE"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class MalformedCursorError(ServiceError):
    code = "MALFORMED_CURSOR"


class InvalidPaginationArgsError(ServiceError):
    code = "INVALID_PAGINATION_ARGS"
