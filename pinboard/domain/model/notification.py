"""Notification entity."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, model_validator

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import (
    NotificationEntityType,
    NotificationId,
    NotificationType,
    ThreadId,
    UserId,
)


class Notification(DomainModel):
    """Notification delivered to a single recipient.

    Business rules:
    - recipient and actor always differ (self notifications are never created)
    - read_at moves from None to a timestamp once and is never cleared
    """

    id: NotificationId
    recipient_id: UserId
    actor_id: UserId
    type: NotificationType
    entity_type: NotificationEntityType
    entity_id: UUID
    thread_id: Optional[ThreadId] = None
    message: str = Field(min_length=1, max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
    read_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_not_self(self) -> "Notification":
        """Reject notifications addressed to their own actor."""
        if self.recipient_id == self.actor_id:
            raise ValueError("Notification recipient cannot be the actor")
        return self

    @property
    def is_read(self) -> bool:
        """Whether the recipient has read this notification."""
        return self.read_at is not None
