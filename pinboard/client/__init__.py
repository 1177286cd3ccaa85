"""Client-side badge sync for the Pinboard API."""

from .api import PinboardClient
from .bus import BadgeBus, BadgeTopic, Subscription, UnreadChanged
from .error import ClientError
from .poller import (
    BadgeCounter,
    UnreadPoller,
    chat_unread_poller,
    notification_unread_poller,
    open_chat,
)

__all__ = [
    "PinboardClient",
    "BadgeBus",
    "BadgeTopic",
    "Subscription",
    "UnreadChanged",
    "ClientError",
    "BadgeCounter",
    "UnreadPoller",
    "chat_unread_poller",
    "notification_unread_poller",
    "open_chat",
]
