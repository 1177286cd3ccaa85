"""Submit vote use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import VoteService
from pinboard.domain.value import UserId, Votable, VotableType, VoteTally


class SubmitVoteRequest(BaseModel):
    """Submit vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    value: Any  # Validated by the vote service; only 1 and -1 are accepted


class VoteTallyResponse(BaseModel):
    """Live vote aggregate for one thread or response."""

    votable_type: VotableType
    votable_id: str
    upvotes: int
    downvotes: int
    score: int
    viewer_vote: int

    @classmethod
    def from_tally(cls, votable: Votable, tally: VoteTally) -> "VoteTallyResponse":
        return cls(
            votable_type=votable.type,
            votable_id=str(votable.id),
            upvotes=tally.upvotes,
            downvotes=tally.downvotes,
            score=tally.score,
            viewer_vote=tally.viewer_vote,
        )


class SubmitVoteUseCase:
    """Use case for voting a thread or response up or down."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize submit vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: SubmitVoteRequest) -> VoteTallyResponse:
        """Execute vote flow.

        Args:
            request: Submit vote request

        Returns:
            Fresh tally including the voter's own vote

        Raises:
            InvalidVoteValueError: If value is not 1 or -1
            EntityNotFoundError: If the item does not exist
        """
        votable = Votable(id=UUID(request.votable_id), type=request.votable_type)
        tally = await self.vote_service.submit_vote(
            votable, UserId(UUID(request.user_id)), request.value
        )
        return VoteTallyResponse.from_tally(votable, tally)
