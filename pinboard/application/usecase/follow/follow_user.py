"""Follow user use case."""

from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import FollowService
from pinboard.domain.value import UserId


class FollowUserRequest(BaseModel):
    """Follow user request."""

    follower_id: str  # User ID from authenticated user
    following_id: str


class FollowStateResponse(BaseModel):
    """Follow state after a follow or unfollow."""

    user_id: str
    following: bool
    changed: bool


class FollowUserUseCase:
    """Use case for following a user."""

    def __init__(self, follow_service: FollowService) -> None:
        self.follow_service = follow_service

    async def execute(self, request: FollowUserRequest) -> FollowStateResponse:
        """Execute follow flow.

        Raises:
            ValidationError: If the user tries to follow themselves
            EntityNotFoundError: If the target user does not exist
        """
        result = await self.follow_service.follow(
            UserId(UUID(request.follower_id)), UserId(UUID(request.following_id))
        )
        return FollowStateResponse(
            user_id=request.following_id,
            following=result.following,
            changed=result.created,
        )
