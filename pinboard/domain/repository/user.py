"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional

from pinboard.domain.model.user import User
from pinboard.domain.value import Handle, UserId


class UserRepository(ABC):
    """Repository for User accounts.

    Defines the contract for user lookups used by the engagement engine.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by their normalized handle.

        Args:
            handle: The user's handle

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_handles(self, handles: Collection[str]) -> List[User]:
        """Find all users whose handle is in the given set (batch query).

        Handles are compared against the stored lowercase handle.

        Args:
            handles: Lowercase handles to look up

        Returns:
            Users that exist; unknown handles are simply absent
        """
        pass

    @abstractmethod
    async def search(
        self, exclude_id: UserId, query: str = "", handle_query: str = ""
    ) -> List[User]:
        """Find users other than ``exclude_id`` matching a search.

        Args:
            exclude_id: User to leave out (the viewer)
            query: Lowercase substring matched against the display name
            handle_query: Lowercase substring matched against the handle

        Returns:
            Matching users; all other users when both queries are empty
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Raises:
            ConflictError: If the handle is already taken
        """
        pass
