"""Mark notification(s) read use cases."""

from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import UnreadService
from pinboard.domain.value import NotificationId, UserId


class MarkNotificationReadRequest(BaseModel):
    """Mark one notification read request."""

    notification_id: str
    user_id: str


class MarkNotificationReadResponse(BaseModel):
    """Mark one notification read response."""

    marked_read: bool
    unread_count: int


class MarkAllNotificationsReadRequest(BaseModel):
    """Mark all notifications read request."""

    user_id: str


class MarkAllNotificationsReadResponse(BaseModel):
    """Mark all notifications read response."""

    marked_read: int
    unread_count: int


class MarkNotificationReadUseCase:
    """Use case for marking a single notification read."""

    def __init__(self, unread_service: UnreadService) -> None:
        self.unread_service = unread_service

    async def execute(
        self, request: MarkNotificationReadRequest
    ) -> MarkNotificationReadResponse:
        """Mark one notification read.

        Unknown IDs, other users' notifications and already-read ones all
        return ``marked_read=False``.
        """
        user_id = UserId(UUID(request.user_id))
        marked = await self.unread_service.mark_one_read(
            NotificationId(UUID(request.notification_id)), user_id
        )
        return MarkNotificationReadResponse(
            marked_read=marked,
            unread_count=await self.unread_service.unread_notification_count(user_id),
        )


class MarkAllNotificationsReadUseCase:
    """Use case for clearing the notification badge."""

    def __init__(self, unread_service: UnreadService) -> None:
        self.unread_service = unread_service

    async def execute(
        self, request: MarkAllNotificationsReadRequest
    ) -> MarkAllNotificationsReadResponse:
        user_id = UserId(UUID(request.user_id))
        count = await self.unread_service.mark_all_read(user_id)
        return MarkAllNotificationsReadResponse(
            marked_read=count,
            unread_count=await self.unread_service.unread_notification_count(user_id),
        )
