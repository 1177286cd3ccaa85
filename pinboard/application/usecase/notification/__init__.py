"""Notification use cases."""

from .get_unread_count import (
    GetUnreadCountRequest,
    GetUnreadCountUseCase,
    UnreadCountResponse,
)
from .list_notifications import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    NotificationItem,
)
from .mark_read import (
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadResponse,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
)

__all__ = [
    "GetUnreadCountRequest",
    "GetUnreadCountUseCase",
    "UnreadCountResponse",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "NotificationItem",
    "MarkAllNotificationsReadRequest",
    "MarkAllNotificationsReadResponse",
    "MarkAllNotificationsReadUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadResponse",
    "MarkNotificationReadUseCase",
]
