"""PostgreSQL implementation of Follow repository."""

from typing import List

import logfire
from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.error import PersistenceFault
from pinboard.domain.model import Follow
from pinboard.domain.repository import FollowRepository
from pinboard.domain.value import UserId
from pinboard.persistence.mappers import follow_to_dict
from pinboard.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, follow: Follow) -> bool:
        """Insert a follow unless the pair already exists.

        Returns:
            True if a row was inserted
        """
        stmt = (
            insert(follows_table)
            .values(**follow_to_dict(follow))
            .on_conflict_do_nothing(constraint="unique_follow")
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error("Failed to save follow", error=str(e))
            raise PersistenceFault("Failed to follow user") from e
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def remove(self, follower_id: UserId, following_id: UserId) -> bool:
        """Delete a follow if present."""
        stmt = delete(follows_table).where(
            and_(
                follows_table.c.follower_id == follower_id,
                follows_table.c.following_id == following_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_following_ids(self, follower_id: UserId) -> List[UserId]:
        """List the users someone follows."""
        stmt = select(follows_table.c.following_id).where(
            follows_table.c.follower_id == follower_id
        )
        result = await self.session.execute(stmt)
        return [UserId(row) for row in result.scalars().all()]
