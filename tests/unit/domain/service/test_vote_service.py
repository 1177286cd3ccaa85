"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from pinboard.domain.error import EntityNotFoundError, InvalidVoteValueError
from pinboard.domain.repository import VoteRepository
from pinboard.domain.service import VoteService, parse_vote_value
from pinboard.domain.value import UserId, Votable, VotableType, VoteTally
from tests.conftest import make_response, make_thread, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _ledger_tally(vote_repo: VoteRepository, votable: Votable) -> tuple[int, int]:
    votes = await vote_repo.find_by_votable(votable.type, votable.id)
    upvotes = sum(1 for v in votes if v.value == 1)
    downvotes = sum(1 for v in votes if v.value == -1)
    return upvotes, downvotes


class TestParseVoteValue:
    """Tests for vote value validation."""

    @pytest.mark.parametrize("value", [1, -1])
    def test_accepts_unit_values(self, value):
        assert int(parse_vote_value(value)) == value

    @pytest.mark.parametrize("value", [0, 2, -2, True, False, 1.0, "1", None])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidVoteValueError):
            parse_vote_value(value)


class TestSubmitVote:
    """Tests for submit_vote."""

    @pytest.mark.asyncio
    async def test_vote_flip_scenario(self, unit_env):
        """Upvote, flip to downvote, then a second voter upvotes."""
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env, "author")
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")
        thread = await make_thread(unit_env, author)
        votable = Votable(id=thread.id, type=VotableType.THREAD)

        tally = await vote_service.submit_vote(votable, alice.id, 1)
        assert (tally.upvotes, tally.downvotes, tally.viewer_vote) == (1, 0, 1)
        assert tally.score == 1

        tally = await vote_service.submit_vote(votable, alice.id, -1)
        assert (tally.upvotes, tally.downvotes, tally.viewer_vote) == (0, 1, -1)
        assert tally.score == -1

        tally = await vote_service.submit_vote(votable, bob.id, 1)
        assert (tally.upvotes, tally.downvotes, tally.viewer_vote) == (1, 1, 1)
        assert tally.score == 0

    @pytest.mark.asyncio
    async def test_repeat_vote_leaves_tally_unchanged(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env, "author")
        voter = await make_user(unit_env, "voter")
        thread = await make_thread(unit_env, author)
        votable = Votable(id=thread.id, type=VotableType.THREAD)

        first = await vote_service.submit_vote(votable, voter.id, 1)
        second = await vote_service.submit_vote(votable, voter.id, 1)

        assert first == second
        assert second.upvotes == 1

    @pytest.mark.asyncio
    async def test_tally_matches_vote_ledger(self, unit_env):
        """Aggregates always equal a sum over the stored votes."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await make_user(unit_env, "author")
        thread = await make_thread(unit_env, author)
        votable = Votable(id=thread.id, type=VotableType.THREAD)

        voters = [await make_user(unit_env, f"voter_{i}") for i in range(4)]
        for voter, value in zip(voters, [1, 1, -1, 1]):
            await vote_service.submit_vote(votable, voter.id, value)
        # Voter 0 changes their mind
        await vote_service.submit_vote(votable, voters[0].id, -1)

        tally = await vote_service.get_tally(votable)
        assert (tally.upvotes, tally.downvotes) == await _ledger_tally(vote_repo, votable)
        assert (tally.upvotes, tally.downvotes) == (2, 2)

    @pytest.mark.asyncio
    async def test_author_can_vote_on_own_thread(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env, "author")
        thread = await make_thread(unit_env, author)

        tally = await vote_service.submit_vote(
            Votable(id=thread.id, type=VotableType.THREAD), author.id, 1
        )

        assert tally.upvotes == 1
        assert tally.viewer_vote == 1

    @pytest.mark.asyncio
    async def test_vote_on_response(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env, "author")
        voter = await make_user(unit_env, "voter")
        thread = await make_thread(unit_env, author)
        response = await make_response(unit_env, thread, author)

        tally = await vote_service.submit_vote(
            Votable(id=response.id, type=VotableType.RESPONSE), voter.id, -1
        )

        assert tally.downvotes == 1
        # Thread tally is independent of its responses
        thread_tally = await vote_service.get_tally(
            Votable(id=thread.id, type=VotableType.THREAD)
        )
        assert thread_tally == VoteTally()

    @pytest.mark.asyncio
    async def test_vote_on_missing_thread_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        votable = Votable(id=uuid4(), type=VotableType.THREAD)

        with pytest.raises(EntityNotFoundError):
            await vote_service.submit_vote(votable, UserId(uuid4()), 1)

        assert await vote_repo.find_by_votable(votable.type, votable.id) == []

    @pytest.mark.asyncio
    async def test_invalid_value_is_rejected_before_lookup(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        votable = Votable(id=uuid4(), type=VotableType.THREAD)

        with pytest.raises(InvalidVoteValueError):
            await vote_service.submit_vote(votable, UserId(uuid4()), 0)


class TestGetTallies:
    """Tests for the batch tally used by feeds."""

    @pytest.mark.asyncio
    async def test_viewer_vote_is_zero_for_anonymous(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        author = await make_user(unit_env, "author")
        voter = await make_user(unit_env, "voter")
        voted = await make_thread(unit_env, author, title="Voted")
        quiet = await make_thread(unit_env, author, title="Quiet")
        await vote_service.submit_vote(
            Votable(id=voted.id, type=VotableType.THREAD), voter.id, 1
        )

        anonymous = await vote_service.get_tallies(
            VotableType.THREAD, [voted.id, quiet.id]
        )
        as_voter = await vote_service.get_tallies(
            VotableType.THREAD, [voted.id, quiet.id], voter.id
        )

        assert anonymous[voted.id] == VoteTally(upvotes=1, downvotes=0, viewer_vote=0)
        assert anonymous[quiet.id] == VoteTally()
        assert as_voter[voted.id].viewer_vote == 1
        assert as_voter[quiet.id].viewer_vote == 0

    @pytest.mark.asyncio
    async def test_empty_ids(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        assert await vote_service.get_tallies(VotableType.THREAD, []) == {}
