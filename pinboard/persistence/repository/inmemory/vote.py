"""In-memory vote repository for testing."""

from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from pinboard.domain.model import Vote
from pinboard.domain.repository import VoteRepository
from pinboard.domain.value import UserId, VotableType

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        votable_uuid = UUID(str(votable_id))
        for vote in self._store.votes:
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_uuid
            ):
                return vote
        return None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        return [
            v
            for v in self._store.votes
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in votable_uuids
        ]

    async def find_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> List[Vote]:
        """Find all votes for a votable item."""
        votable_uuid = UUID(str(votable_id))
        return [
            v
            for v in self._store.votes
            if v.votable_type == votable_type and v.votable_id == votable_uuid
        ]

    async def upsert(self, vote: Vote) -> Vote:
        """Insert a vote or overwrite the existing one's value."""
        for i, existing in enumerate(self._store.votes):
            if (
                existing.user_id == vote.user_id
                and existing.votable_type == vote.votable_type
                and existing.votable_id == vote.votable_id
            ):
                updated = existing.model_copy(
                    update={"value": vote.value, "updated_at": vote.updated_at}
                )
                self._store.votes[i] = updated
                return updated

        self._store.votes.append(vote)
        return vote

    async def tally(
        self, votable_type: VotableType, votable_id: UUID
    ) -> Tuple[int, int]:
        """Sum the ledger for one item."""
        votes = await self.find_by_votable(votable_type, votable_id)
        upvotes = sum(1 for v in votes if v.value > 0)
        return upvotes, len(votes) - upvotes

    async def tally_many(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> Dict[UUID, Tuple[int, int]]:
        """Sum the ledger for several items."""
        return {
            UUID(str(vid)): await self.tally(votable_type, vid) for vid in votable_ids
        }
