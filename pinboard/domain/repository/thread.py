"""Thread repository interface."""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional

from pinboard.domain.model.thread import Thread
from pinboard.domain.value import ThreadId, UserId


class ThreadRepository(ABC):
    """Repository for Thread entities."""

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID.

        Args:
            thread_id: The thread's unique identifier

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, thread_id: ThreadId) -> bool:
        """Check whether a thread exists."""
        pass

    @abstractmethod
    async def find_all(
        self,
        search: Optional[str] = None,
        author_ids: Optional[Collection[UserId]] = None,
    ) -> List[Thread]:
        """Find threads for a feed.

        Args:
            search: Case-insensitive substring matched against title or body
            author_ids: Restrict to these authors (None for all authors)

        Returns:
            Matching threads, newest first
        """
        pass

    @abstractmethod
    async def save(self, thread: Thread) -> Thread:
        """Save a thread."""
        pass
