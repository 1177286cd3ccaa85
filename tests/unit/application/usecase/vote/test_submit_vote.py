"""Unit tests for SubmitVoteUseCase and GetScoreUseCase."""

import pytest

from pinboard.application.usecase.vote import (
    GetScoreRequest,
    GetScoreUseCase,
    SubmitVoteRequest,
    SubmitVoteUseCase,
)
from pinboard.domain.error import InvalidVoteValueError
from pinboard.domain.value import VotableType
from tests.conftest import make_response, make_thread, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSubmitVoteUseCase:
    """Tests for SubmitVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_returns_tally(self, unit_env):
        use_case = await unit_env.get(SubmitVoteUseCase)
        author = await make_user(unit_env, "author")
        voter = await make_user(unit_env, "voter")
        thread = await make_thread(unit_env, author)

        result = await use_case.execute(
            SubmitVoteRequest(
                votable_type=VotableType.THREAD,
                votable_id=str(thread.id),
                user_id=str(voter.id),
                value=-1,
            )
        )

        assert result.votable_id == str(thread.id)
        assert (result.upvotes, result.downvotes, result.score) == (0, 1, -1)
        assert result.viewer_vote == -1

    @pytest.mark.asyncio
    async def test_boolean_value_rejected(self, unit_env):
        use_case = await unit_env.get(SubmitVoteUseCase)
        author = await make_user(unit_env, "author")
        thread = await make_thread(unit_env, author)

        with pytest.raises(InvalidVoteValueError):
            await use_case.execute(
                SubmitVoteRequest(
                    votable_type=VotableType.THREAD,
                    votable_id=str(thread.id),
                    user_id=str(author.id),
                    value=True,
                )
            )


class TestGetScoreUseCase:
    """Tests for GetScoreUseCase."""

    @pytest.mark.asyncio
    async def test_score_for_viewer_and_anonymous(self, unit_env):
        submit = await unit_env.get(SubmitVoteUseCase)
        get_score = await unit_env.get(GetScoreUseCase)
        author = await make_user(unit_env, "author")
        voter = await make_user(unit_env, "voter")
        thread = await make_thread(unit_env, author)
        response = await make_response(unit_env, thread, author)
        await submit.execute(
            SubmitVoteRequest(
                votable_type=VotableType.RESPONSE,
                votable_id=str(response.id),
                user_id=str(voter.id),
                value=1,
            )
        )

        anonymous = await get_score.execute(
            GetScoreRequest(votable_type=VotableType.RESPONSE, votable_id=str(response.id))
        )
        as_voter = await get_score.execute(
            GetScoreRequest(
                votable_type=VotableType.RESPONSE,
                votable_id=str(response.id),
                user_id=str(voter.id),
            )
        )

        assert anonymous.score == 1
        assert anonymous.viewer_vote == 0
        assert as_voter.viewer_vote == 1
