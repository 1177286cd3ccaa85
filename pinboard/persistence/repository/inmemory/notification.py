"""In-memory notification repository for testing."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Collection, List, Optional

from pinboard.domain.model import Notification
from pinboard.domain.repository import NotificationRepository
from pinboard.domain.value import NotificationId, NotificationType, UserId

from .store import InMemoryStore


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    def _owned(
        self, recipient_id: UserId, exclude_types: Collection[NotificationType]
    ) -> list[Notification]:
        excluded = set(exclude_types)
        return [
            n
            for n in self._store.notifications
            if n.recipient_id == recipient_id and n.type not in excluded
        ]

    @asynccontextmanager
    async def isolated(self) -> AsyncIterator[None]:
        yield

    async def save(self, notification: Notification) -> Notification:
        self._store.notifications.append(notification)
        return notification

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        for notification in self._store.notifications:
            if notification.id == notification_id:
                return notification
        return None

    async def find_for_recipient(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        notifications = self._owned(recipient_id, exclude_types)
        if unread_only:
            notifications = [n for n in notifications if not n.is_read]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[:limit]

    async def count_unread(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> int:
        return sum(1 for n in self._owned(recipient_id, exclude_types) if not n.is_read)

    def _mark(self, notification: Notification) -> None:
        index = self._store.notifications.index(notification)
        self._store.notifications[index] = notification.model_copy(
            update={"read_at": datetime.now()}
        )

    async def mark_read(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> bool:
        for notification in self._owned(recipient_id, exclude_types):
            if notification.id == notification_id and not notification.is_read:
                self._mark(notification)
                return True
        return False

    async def mark_all_read(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> int:
        unread = [n for n in self._owned(recipient_id, exclude_types) if not n.is_read]
        for notification in unread:
            self._mark(notification)
        return len(unread)
