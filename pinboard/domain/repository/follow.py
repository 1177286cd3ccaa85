"""Follow repository interface."""

from abc import ABC, abstractmethod
from typing import List

from pinboard.domain.model.follow import Follow
from pinboard.domain.value import UserId


class FollowRepository(ABC):
    """Repository for follow relationships."""

    @abstractmethod
    async def add(self, follow: Follow) -> bool:
        """Insert a follow unless the pair already exists.

        The returned flag is the insert's affected-row count and gates the
        FOLLOW notification.

        Args:
            follow: The follow to store

        Returns:
            True if a new row was written, False if already following
        """
        pass

    @abstractmethod
    async def remove(self, follower_id: UserId, following_id: UserId) -> bool:
        """Delete a follow.

        Returns:
            True if a follow was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def find_following_ids(self, follower_id: UserId) -> List[UserId]:
        """List the users a follower follows."""
        pass
