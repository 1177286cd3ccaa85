"""In-process pub/sub for unread badge totals.

UI regions that learn a fresh unread total publish it here so every other
region showing the same badge updates without waiting for its own poll.
"""

from enum import Enum
from typing import Callable

import logfire
from pydantic import BaseModel, ConfigDict


class BadgeTopic(str, Enum):
    """Badge channels."""

    CHAT_UNREAD = "chat_unread"
    NOTIFICATION_UNREAD = "notification_unread"


class UnreadChanged(BaseModel):
    """A freshly observed unread total."""

    model_config = ConfigDict(frozen=True)

    topic: BadgeTopic
    total: int


Subscriber = Callable[[UnreadChanged], None]


class Subscription:
    """Handle returned by ``BadgeBus.subscribe``."""

    def __init__(self, bus: "BadgeBus", topic: BadgeTopic, callback: Subscriber) -> None:
        self.bus = bus
        self.topic = topic
        self.callback = callback

    @property
    def active(self) -> bool:
        return self.bus.is_subscribed(self)

    def unsubscribe(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        self.bus.unsubscribe(self)


class BadgeBus:
    """Synchronous topic-based event bus.

    Delivery happens in subscription order on the publisher's stack. A
    failing subscriber is logged and skipped; the rest still receive the
    event.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[BadgeTopic, list[Subscription]] = {
            topic: [] for topic in BadgeTopic
        }

    def subscribe(self, topic: BadgeTopic, callback: Subscriber) -> Subscription:
        subscription = Subscription(self, topic, callback)
        self._subscriptions[topic].append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions[subscription.topic]
        if subscription in subscriptions:
            subscriptions.remove(subscription)

    def is_subscribed(self, subscription: Subscription) -> bool:
        return subscription in self._subscriptions[subscription.topic]

    def subscriber_count(self, topic: BadgeTopic) -> int:
        return len(self._subscriptions[topic])

    def publish(self, event: UnreadChanged) -> int:
        """Deliver an event to every current subscriber of its topic.

        Returns:
            Number of subscribers that handled the event without error
        """
        delivered = 0
        # Copy so callbacks may unsubscribe while we iterate
        for subscription in list(self._subscriptions[event.topic]):
            try:
                subscription.callback(event)
                delivered += 1
            except Exception:
                logfire.exception(
                    "Badge subscriber failed", topic=event.topic.value, total=event.total
                )
        return delivered
