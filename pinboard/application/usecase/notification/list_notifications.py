"""List notifications use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.model import Notification
from pinboard.domain.service import NotificationService, UnreadService
from pinboard.domain.value import NotificationEntityType, NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification in a list."""

    notification_id: str
    type: NotificationType
    entity_type: NotificationEntityType
    entity_id: str
    thread_id: str | None
    actor_id: str
    message: str
    created_at: datetime
    read_at: datetime | None
    is_read: bool

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=str(notification.id),
            type=notification.type,
            entity_type=notification.entity_type,
            entity_id=str(notification.entity_id),
            thread_id=str(notification.thread_id) if notification.thread_id else None,
            actor_id=str(notification.actor_id),
            message=notification.message,
            created_at=notification.created_at,
            read_at=notification.read_at,
            is_read=notification.is_read,
        )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str
    unread_only: bool = False
    limit: int | None = None  # Clamped to 1-100 by the service


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    unread_count: int


class ListNotificationsUseCase:
    """Use case for listing a user's notifications with the unread badge."""

    def __init__(
        self,
        notification_service: NotificationService,
        unread_service: UnreadService,
    ) -> None:
        self.notification_service = notification_service
        self.unread_service = unread_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow.

        Args:
            request: Recipient, unread filter and limit

        Returns:
            Notifications newest first plus the unread count
        """
        user_id = UserId(UUID(request.user_id))

        notifications = await self.notification_service.list_notifications(
            user_id, unread_only=request.unread_only, limit=request.limit
        )
        unread_count = await self.unread_service.unread_notification_count(user_id)

        return ListNotificationsResponse(
            notifications=[NotificationItem.from_notification(n) for n in notifications],
            unread_count=unread_count,
        )
