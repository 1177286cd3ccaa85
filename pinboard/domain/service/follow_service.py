"""Follow domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from pinboard.domain.error import ValidationError
from pinboard.domain.model import Follow
from pinboard.domain.repository import FollowRepository
from pinboard.domain.value import FollowId, UserId
from pinboard.domain.value.common import ValueObject

from .base import Service
from .notification_service import NotificationService
from .user_service import UserService


class FollowResult(ValueObject):
    """Outcome of a follow request."""

    following: bool
    created: bool


class FollowService(Service):
    """Domain service for following users."""

    def __init__(
        self,
        follow_repository: FollowRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        self.follow_repository = follow_repository
        self.user_service = user_service
        self.notification_service = notification_service

    async def follow(self, follower_id: UserId, following_id: UserId) -> FollowResult:
        """Follow a user.

        A FOLLOW notification is sent only when the relationship is new;
        repeating the request is a no-op.

        Args:
            follower_id: User doing the following
            following_id: User being followed

        Returns:
            Follow result with ``created`` set when a row was inserted

        Raises:
            ValidationError: If a user tries to follow themselves
            EntityNotFoundError: If either user does not exist
        """
        if follower_id == following_id:
            raise ValidationError("You cannot follow yourself")

        with logfire.span(
            "follow_service.follow",
            follower_id=str(follower_id),
            following_id=str(following_id),
        ):
            await self.user_service.get_by_id(following_id)
            follower = await self.user_service.get_by_id(follower_id)

            created = await self.follow_repository.add(
                Follow(
                    id=FollowId(uuid4()),
                    follower_id=follower_id,
                    following_id=following_id,
                    created_at=datetime.now(),
                )
            )

            if created:
                logfire.info("Follow created", follower=follower.handle.root)
                await self.notification_service.notify_follow(follower, following_id)

            return FollowResult(following=True, created=created)

    async def unfollow(self, follower_id: UserId, following_id: UserId) -> bool:
        """Stop following a user.

        Returns:
            True if a follow was removed
        """
        with logfire.span(
            "follow_service.unfollow",
            follower_id=str(follower_id),
            following_id=str(following_id),
        ):
            removed = await self.follow_repository.remove(follower_id, following_id)
            logfire.info("Unfollow processed", removed=removed)
            return removed
