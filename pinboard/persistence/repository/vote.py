"""PostgreSQL implementation of Vote repository."""

from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

import logfire
from sqlalchemy import and_, case, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.error import PersistenceFault
from pinboard.domain.model import Vote
from pinboard.domain.repository import VoteRepository
from pinboard.domain.value import UserId, VotableType
from pinboard.persistence.mappers import row_to_vote, vote_to_dict
from pinboard.persistence.tables import votes_table

_upvotes = func.coalesce(func.sum(case((votes_table.c.value > 0, 1), else_=0)), 0)
_downvotes = func.coalesce(func.sum(case((votes_table.c.value < 0, 1), else_=0)), 0)


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(list(votable_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def find_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> List[Vote]:
        """Find every vote cast on an item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def upsert(self, vote: Vote) -> Vote:
        """Insert or overwrite a vote atomically.

        Raises:
            PersistenceFault: If the statement fails
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        stmt = stmt.on_conflict_do_update(
            constraint="unique_vote",
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(*votes_table.c)

        with logfire.span(
            "vote_repository.upsert",
            votable_type=vote.votable_type.value,
            votable_id=str(vote.votable_id),
        ):
            try:
                result = await self.session.execute(stmt)
                row = result.mappings().one()
                await self.session.flush()
            except SQLAlchemyError as e:
                logfire.error("Failed to upsert vote", error=str(e))
                raise PersistenceFault("Failed to record vote") from e
            return row_to_vote(dict(row))

    async def tally(
        self, votable_type: VotableType, votable_id: UUID
    ) -> Tuple[int, int]:
        """Sum the ledger for one item."""
        stmt = select(_upvotes, _downvotes).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        upvotes, downvotes = result.one()
        return int(upvotes), int(downvotes)

    async def tally_many(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> Dict[UUID, Tuple[int, int]]:
        """Sum the ledger for several items in one grouped query."""
        if not votable_ids:
            return {}

        stmt = (
            select(votes_table.c.votable_id, _upvotes, _downvotes)
            .where(
                and_(
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id.in_(list(votable_ids)),
                )
            )
            .group_by(votes_table.c.votable_id)
        )
        result = await self.session.execute(stmt)
        return {
            votable_id: (int(upvotes), int(downvotes))
            for votable_id, upvotes, downvotes in result.all()
        }
