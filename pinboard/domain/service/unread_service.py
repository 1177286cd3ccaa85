"""Unread state tracking for notifications and direct messages."""

import logfire

from pinboard.domain.repository import DirectMessageRepository, NotificationRepository
from pinboard.domain.value import NotificationId, UserId

from .base import Service
from .notification_service import FEED_EXCLUDED_TYPES


class UnreadService(Service):
    """Counts and clears unread items.

    Two independent channels: general notifications (direct message
    notifications excluded) and direct messages. Read state only ever
    moves from unread to read.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        direct_message_repository: DirectMessageRepository,
    ) -> None:
        self.notification_repository = notification_repository
        self.direct_message_repository = direct_message_repository

    async def unread_notification_count(self, user_id: UserId) -> int:
        """Count unread general notifications."""
        return await self.notification_repository.count_unread(
            user_id, exclude_types=FEED_EXCLUDED_TYPES
        )

    async def unread_message_count(self, user_id: UserId) -> int:
        """Count unread direct messages addressed to the user."""
        return await self.direct_message_repository.count_unread(user_id)

    async def unread_messages_by_sender(self, user_id: UserId) -> dict[UserId, int]:
        """Count unread direct messages grouped by sender."""
        return await self.direct_message_repository.count_unread_by_sender(user_id)

    async def mark_one_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> bool:
        """Mark one of the user's notifications as read.

        Returns:
            True if it was unread and now is read; False for unknown IDs,
            other users' notifications, or ones already read
        """
        with logfire.span(
            "unread_service.mark_one_read",
            user_id=str(user_id),
            notification_id=str(notification_id),
        ):
            changed = await self.notification_repository.mark_read(
                notification_id, user_id, exclude_types=FEED_EXCLUDED_TYPES
            )
            logfire.info("Notification marked read", changed=changed)
            return changed

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of the user's general notifications as read.

        Returns:
            Number of notifications changed
        """
        with logfire.span("unread_service.mark_all_read", user_id=str(user_id)):
            count = await self.notification_repository.mark_all_read(
                user_id, exclude_types=FEED_EXCLUDED_TYPES
            )
            logfire.info("Notifications marked read", count=count)
            return count

    async def mark_conversation_read(self, viewer_id: UserId, sender_id: UserId) -> int:
        """Mark messages from ``sender_id`` to ``viewer_id`` as read.

        Returns:
            Number of messages changed
        """
        with logfire.span(
            "unread_service.mark_conversation_read",
            viewer_id=str(viewer_id),
            sender_id=str(sender_id),
        ):
            return await self.direct_message_repository.mark_read_from(
                sender_id, viewer_id
            )
