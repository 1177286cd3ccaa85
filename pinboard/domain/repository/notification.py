"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, Collection, List, Optional

from pinboard.domain.model.notification import Notification
from pinboard.domain.value import NotificationId, NotificationType, UserId


class NotificationRepository(ABC):
    """Repository for Notification records.

    ``exclude_types`` lets callers keep whole notification types out of a
    query (direct messages have their own unread channel).
    """

    @abstractmethod
    def isolated(self) -> AsyncContextManager[object]:
        """Scope for fan-out work that must not affect the caller's write.

        Reads and writes performed inside the scope (mention lookups
        included) are rolled back on error without aborting the surrounding
        transaction. Use as ``async with repository.isolated(): ...``.
        """
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Insert a notification.

        Implementations must isolate the insert (e.g. in a savepoint) so a
        failure here cannot abort the surrounding transaction.

        Args:
            notification: The notification to store

        Returns:
            The stored notification
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_for_recipient(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        """List a user's notifications, newest first.

        Args:
            recipient_id: Owner of the notifications
            exclude_types: Notification types to leave out
            unread_only: Only return notifications with read_at unset
            limit: Maximum number of notifications

        Returns:
            Notifications ordered by created_at DESC
        """
        pass

    @abstractmethod
    async def count_unread(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> int:
        """Count notifications with read_at unset."""
        pass

    @abstractmethod
    async def mark_read(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> bool:
        """Set read_at on one notification if it is unread and owned by the user.

        Returns:
            True if a row changed, False otherwise (already read, missing,
            owned by someone else, or an excluded type)
        """
        pass

    @abstractmethod
    async def mark_all_read(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> int:
        """Set read_at on every unread notification the user owns.

        Returns:
            Number of notifications changed
        """
        pass
