"""PostgreSQL repository implementations."""

from pinboard.persistence.repository.direct_message import (
    PostgresDirectMessageRepository,
)
from pinboard.persistence.repository.follow import PostgresFollowRepository
from pinboard.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from pinboard.persistence.repository.response import PostgresResponseRepository
from pinboard.persistence.repository.thread import PostgresThreadRepository
from pinboard.persistence.repository.user import PostgresUserRepository
from pinboard.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresThreadRepository",
    "PostgresResponseRepository",
    "PostgresVoteRepository",
    "PostgresNotificationRepository",
    "PostgresDirectMessageRepository",
    "PostgresFollowRepository",
]
