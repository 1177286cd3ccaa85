"""Unfollow user use case."""

from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import FollowService
from pinboard.domain.value import UserId

from .follow_user import FollowStateResponse


class UnfollowUserRequest(BaseModel):
    """Unfollow user request."""

    follower_id: str
    following_id: str


class UnfollowUserUseCase:
    """Use case for unfollowing a user."""

    def __init__(self, follow_service: FollowService) -> None:
        self.follow_service = follow_service

    async def execute(self, request: UnfollowUserRequest) -> FollowStateResponse:
        removed = await self.follow_service.unfollow(
            UserId(UUID(request.follower_id)), UserId(UUID(request.following_id))
        )
        return FollowStateResponse(
            user_id=request.following_id, following=False, changed=removed
        )
