"""In-memory repository implementations for testing."""

from .direct_message import InMemoryDirectMessageRepository
from .follow import InMemoryFollowRepository
from .notification import InMemoryNotificationRepository
from .response import InMemoryResponseRepository
from .store import InMemoryStore
from .thread import InMemoryThreadRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryDirectMessageRepository",
    "InMemoryFollowRepository",
    "InMemoryNotificationRepository",
    "InMemoryResponseRepository",
    "InMemoryStore",
    "InMemoryThreadRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
