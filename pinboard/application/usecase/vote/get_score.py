"""Get score use case."""

from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import VoteService
from pinboard.domain.value import UserId, Votable, VotableType

from .submit_vote import VoteTallyResponse


class GetScoreRequest(BaseModel):
    """Get score request."""

    votable_type: VotableType
    votable_id: str
    user_id: str | None = None  # Viewer, if authenticated


class GetScoreUseCase:
    """Use case for reading a live score."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetScoreRequest) -> VoteTallyResponse:
        votable = Votable(id=UUID(request.votable_id), type=request.votable_type)
        viewer_id = UserId(UUID(request.user_id)) if request.user_id else None
        tally = await self.vote_service.get_tally(votable, viewer_id)
        return VoteTallyResponse.from_tally(votable, tally)
