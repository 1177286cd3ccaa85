"""Vote domain service (score aggregation)."""

from datetime import datetime
from typing import Awaitable, Callable, Mapping, Sequence
from uuid import UUID, uuid4

import logfire

from pinboard.domain.error import EntityNotFoundError, InvalidVoteValueError
from pinboard.domain.model.vote import Vote
from pinboard.domain.repository import VoteRepository
from pinboard.domain.value import (
    UserId,
    Votable,
    VotableType,
    VoteId,
    VoteTally,
    VoteValue,
)

from .base import Service

ExistenceCheck = Callable[[UUID], Awaitable[bool]]


def parse_vote_value(value: object) -> VoteValue:
    """Validate a raw vote value.

    Only the integers 1 and -1 are accepted. Booleans, floats and anything
    else are rejected rather than clamped.

    Raises:
        InvalidVoteValueError: If value is not exactly 1 or -1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidVoteValueError(value)
    if value not in (VoteValue.UP, VoteValue.DOWN):
        raise InvalidVoteValueError(value)
    return VoteValue(value)


class VoteService(Service):
    """Domain service for votes and live score aggregation.

    Scores are always summed from the vote ledger on read; nothing is
    cached on the thread or response rows. Existence checks for each
    votable type are injected so the service stays entity-agnostic.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        existence_checks: Mapping[VotableType, ExistenceCheck],
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            existence_checks: Async existence check per votable type
        """
        self.vote_repository = vote_repository
        self.existence_checks = existence_checks

    async def _ensure_exists(self, votable: Votable) -> None:
        check = self.existence_checks.get(votable.type)
        if check is None or not await check(votable.id):
            logfire.warn(
                "Votable not found",
                votable_type=votable.type.value,
                votable_id=str(votable.id),
            )
            raise EntityNotFoundError(votable.type.value.capitalize(), str(votable.id))

    async def submit_vote(
        self, votable: Votable, voter_id: UserId, value: object
    ) -> VoteTally:
        """Record a user's vote and return the fresh aggregate.

        Repeating the same value leaves the aggregate unchanged; switching
        direction moves the net score by 2. Authors may vote on their own
        content.

        Args:
            votable: Thread or response being voted on
            voter_id: Voting user
            value: 1 or -1

        Returns:
            Tally including the voter's own vote

        Raises:
            InvalidVoteValueError: If value is not 1 or -1
            EntityNotFoundError: If the thread or response does not exist
        """
        vote_value = parse_vote_value(value)

        with logfire.span(
            "vote_service.submit_vote",
            votable_type=votable.type.value,
            votable_id=str(votable.id),
            voter_id=str(voter_id),
            value=int(vote_value),
        ):
            await self._ensure_exists(votable)

            now = datetime.now()
            await self.vote_repository.upsert(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=voter_id,
                    votable_type=votable.type,
                    votable_id=votable.id,
                    value=vote_value,
                    created_at=now,
                    updated_at=now,
                )
            )

            tally = await self._tally(votable, voter_id)
            logfire.info(
                "Vote recorded",
                votable_id=str(votable.id),
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
            )
            return tally

    async def get_tally(
        self, votable: Votable, viewer_id: UserId | None = None
    ) -> VoteTally:
        """Get the live aggregate for one thread or response.

        Args:
            votable: Thread or response
            viewer_id: Viewing user (None for anonymous)

        Returns:
            Tally; viewer_vote is 0 for anonymous viewers or non-voters

        Raises:
            EntityNotFoundError: If the thread or response does not exist
        """
        with logfire.span(
            "vote_service.get_tally",
            votable_type=votable.type.value,
            votable_id=str(votable.id),
        ):
            await self._ensure_exists(votable)
            return await self._tally(votable, viewer_id)

    async def _tally(self, votable: Votable, viewer_id: UserId | None) -> VoteTally:
        upvotes, downvotes = await self.vote_repository.tally(
            votable.type, votable.id
        )
        viewer_vote = 0
        if viewer_id is not None:
            vote = await self.vote_repository.find_by_user_and_votable(
                viewer_id, votable.type, votable.id
            )
            if vote:
                viewer_vote = int(vote.value)
        return VoteTally(upvotes=upvotes, downvotes=downvotes, viewer_vote=viewer_vote)

    async def get_tallies(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
        viewer_id: UserId | None = None,
    ) -> dict[UUID, VoteTally]:
        """Get live aggregates for many items of one type.

        Uses two batch queries (totals and viewer votes) to avoid N+1.

        Args:
            votable_type: Type of the items
            votable_ids: Item IDs
            viewer_id: Viewing user (None for anonymous)

        Returns:
            Tally per requested ID; items without votes get 0/0/0
        """
        if not votable_ids:
            return {}

        totals = await self.vote_repository.tally_many(votable_type, votable_ids)

        viewer_votes: dict[UUID, int] = {}
        if viewer_id is not None:
            votes = await self.vote_repository.find_by_user_and_votables(
                viewer_id, votable_type, votable_ids
            )
            viewer_votes = {UUID(str(v.votable_id)): int(v.value) for v in votes}

        tallies = {}
        for votable_id in votable_ids:
            key = UUID(str(votable_id))
            upvotes, downvotes = totals.get(key, (0, 0))
            tallies[key] = VoteTally(
                upvotes=upvotes,
                downvotes=downvotes,
                viewer_vote=viewer_votes.get(key, 0),
            )
        return tallies
