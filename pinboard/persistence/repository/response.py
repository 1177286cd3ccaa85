"""PostgreSQL implementation of Response repository."""

from typing import Dict, List, Optional, Sequence

import logfire
from sqlalchemy import exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.error import PersistenceFault
from pinboard.domain.model import Response
from pinboard.domain.repository import ResponseRepository, ThreadActivity
from pinboard.domain.value import ResponseId, ThreadId
from pinboard.persistence.mappers import response_to_dict, row_to_response
from pinboard.persistence.tables import responses_table


class PostgresResponseRepository(ResponseRepository):
    """PostgreSQL implementation of ResponseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, response_id: ResponseId) -> Optional[Response]:
        """Find a response by ID."""
        stmt = select(responses_table).where(responses_table.c.id == response_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_response(dict(row)) if row else None

    async def exists(self, response_id: ResponseId) -> bool:
        """Check whether a response exists."""
        stmt = select(exists().where(responses_table.c.id == response_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def find_by_thread(self, thread_id: ThreadId) -> List[Response]:
        """Find all responses to a thread, oldest first."""
        stmt = (
            select(responses_table)
            .where(responses_table.c.thread_id == thread_id)
            .order_by(responses_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_response(dict(row)) for row in result.mappings().all()]

    async def activity_for_threads(
        self, thread_ids: Sequence[ThreadId]
    ) -> Dict[ThreadId, ThreadActivity]:
        """Count responses and find the newest one per thread (grouped query)."""
        if not thread_ids:
            return {}

        stmt = (
            select(
                responses_table.c.thread_id,
                func.count().label("response_count"),
                func.max(responses_table.c.created_at).label("latest_response_at"),
            )
            .where(responses_table.c.thread_id.in_(list(thread_ids)))
            .group_by(responses_table.c.thread_id)
        )
        result = await self.session.execute(stmt)
        return {
            ThreadId(row["thread_id"]): ThreadActivity(
                response_count=row["response_count"],
                latest_response_at=row["latest_response_at"],
            )
            for row in result.mappings().all()
        }

    async def save(self, response: Response) -> Response:
        """Insert a response.

        Raises:
            PersistenceFault: If the insert fails
        """
        with logfire.span("response_repository.save", response_id=str(response.id)):
            try:
                await self.session.execute(
                    responses_table.insert().values(**response_to_dict(response))
                )
                await self.session.flush()
            except SQLAlchemyError as e:
                logfire.error("Failed to save response", error=str(e))
                raise PersistenceFault("Failed to save response") from e
            return response
