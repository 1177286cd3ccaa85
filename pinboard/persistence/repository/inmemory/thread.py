"""In-memory thread repository for testing."""

from typing import Collection, List, Optional

from pinboard.domain.model import Thread
from pinboard.domain.repository import ThreadRepository
from pinboard.domain.value import ThreadId, UserId

from .store import InMemoryStore


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        for thread in self._store.threads:
            if thread.id == thread_id:
                return thread
        return None

    async def exists(self, thread_id: ThreadId) -> bool:
        return await self.find_by_id(thread_id) is not None

    async def find_all(
        self,
        search: Optional[str] = None,
        author_ids: Optional[Collection[UserId]] = None,
    ) -> List[Thread]:
        threads = list(self._store.threads)
        if search:
            needle = search.lower()
            threads = [
                t
                for t in threads
                if needle in t.title.lower() or needle in t.body.lower()
            ]
        if author_ids is not None:
            authors = set(author_ids)
            threads = [t for t in threads if t.author_id in authors]
        return sorted(threads, key=lambda t: t.created_at, reverse=True)

    async def save(self, thread: Thread) -> Thread:
        self._store.threads.append(thread)
        return thread
