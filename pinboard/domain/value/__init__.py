"""Domain value objects for Pinboard."""

from pinboard.domain.value.identifiers import (
    DirectMessageId,
    FollowId,
    NotificationId,
    ResponseId,
    ThreadId,
    UserId,
    VoteId,
)
from pinboard.domain.value.types import (
    FeedScope,
    FeedSort,
    Handle,
    Mention,
    NotificationEntityType,
    NotificationType,
    Votable,
    VotableType,
    VoteTally,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "ResponseId",
    "VoteId",
    "NotificationId",
    "DirectMessageId",
    "FollowId",
    # Types
    "FeedScope",
    "FeedSort",
    "Handle",
    "Mention",
    "NotificationEntityType",
    "NotificationType",
    "Votable",
    "VotableType",
    "VoteTally",
    "VoteValue",
]
