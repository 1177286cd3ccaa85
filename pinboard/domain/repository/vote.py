"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from pinboard.domain.model.vote import Vote
from pinboard.domain.value import UserId, VotableType


class VoteRepository(ABC):
    """Repository for the Vote ledger.

    Scores are never stored; they are summed from this ledger on read.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (thread or response)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (thread or response)
            votable_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def find_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> List[Vote]:
        """Find all votes on a specific item."""
        pass

    @abstractmethod
    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote or overwrite the value of the user's existing vote.

        Atomic on the (user_id, votable_type, votable_id) unique key, so
        concurrent votes by the same user resolve last-write-wins.

        Args:
            vote: The vote to store

        Returns:
            The stored vote (keeps the original ID and created_at when an
            existing row was overwritten)
        """
        pass

    @abstractmethod
    async def tally(
        self, votable_type: VotableType, votable_id: UUID
    ) -> Tuple[int, int]:
        """Sum the ledger for one item.

        Returns:
            (upvotes, downvotes)
        """
        pass

    @abstractmethod
    async def tally_many(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> Dict[UUID, Tuple[int, int]]:
        """Sum the ledger for several items in one grouped query.

        Returns:
            Mapping of item ID to (upvotes, downvotes); items without votes
            may be omitted
        """
        pass
