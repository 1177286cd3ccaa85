"""Repository interfaces for the Pinboard domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from pinboard.domain.repository.direct_message import DirectMessageRepository
from pinboard.domain.repository.follow import FollowRepository
from pinboard.domain.repository.notification import NotificationRepository
from pinboard.domain.repository.response import ResponseRepository, ThreadActivity
from pinboard.domain.repository.thread import ThreadRepository
from pinboard.domain.repository.user import UserRepository
from pinboard.domain.repository.vote import VoteRepository

__all__ = [
    "DirectMessageRepository",
    "FollowRepository",
    "NotificationRepository",
    "ResponseRepository",
    "ThreadActivity",
    "ThreadRepository",
    "UserRepository",
    "VoteRepository",
]
