"""In-memory follow repository for testing."""

from typing import List

from pinboard.domain.model import Follow
from pinboard.domain.repository import FollowRepository
from pinboard.domain.value import UserId

from .store import InMemoryStore


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def add(self, follow: Follow) -> bool:
        if any(
            f.follower_id == follow.follower_id and f.following_id == follow.following_id
            for f in self._store.follows
        ):
            return False
        self._store.follows.append(follow)
        return True

    async def remove(self, follower_id: UserId, following_id: UserId) -> bool:
        before = len(self._store.follows)
        self._store.follows[:] = [
            f
            for f in self._store.follows
            if not (f.follower_id == follower_id and f.following_id == following_id)
        ]
        return len(self._store.follows) < before

    async def find_following_ids(self, follower_id: UserId) -> List[UserId]:
        return [f.following_id for f in self._store.follows if f.follower_id == follower_id]
