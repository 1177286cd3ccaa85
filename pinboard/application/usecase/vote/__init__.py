"""Vote use cases."""

from .get_score import GetScoreRequest, GetScoreUseCase
from .submit_vote import SubmitVoteRequest, SubmitVoteUseCase, VoteTallyResponse

__all__ = [
    "GetScoreRequest",
    "GetScoreUseCase",
    "SubmitVoteRequest",
    "SubmitVoteUseCase",
    "VoteTallyResponse",
]
