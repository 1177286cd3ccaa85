"""In-memory user repository for testing."""

from typing import Collection, List, Optional

from pinboard.domain.error import ConflictError
from pinboard.domain.model import User
from pinboard.domain.repository import UserRepository
from pinboard.domain.value import Handle, UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        for user in self._store.users:
            if user.id == user_id:
                return user
        return None

    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        for user in self._store.users:
            if user.handle == handle:
                return user
        return None

    async def find_by_handles(self, handles: Collection[str]) -> List[User]:
        wanted = {h.lower() for h in handles}
        return [u for u in self._store.users if u.handle.root in wanted]

    async def search(
        self, exclude_id: UserId, query: str = "", handle_query: str = ""
    ) -> List[User]:
        results = []
        for user in self._store.users:
            if user.id == exclude_id:
                continue
            if query or handle_query:
                name_match = bool(query) and query.lower() in user.name.lower()
                handle_match = bool(handle_query) and handle_query.lower() in user.handle.root
                if not (name_match or handle_match):
                    continue
            results.append(user)
        return sorted(results, key=lambda u: (u.name.lower(), u.handle.root))

    async def save(self, user: User) -> User:
        """Save a user.

        Raises:
            ConflictError: If another user already has the handle
        """
        for existing in self._store.users:
            if existing.handle == user.handle and existing.id != user.id:
                raise ConflictError(f"Handle already taken: {user.handle.root}")
        for i, existing in enumerate(self._store.users):
            if existing.id == user.id:
                self._store.users[i] = user
                return user
        self._store.users.append(user)
        return user
