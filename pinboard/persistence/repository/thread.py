"""PostgreSQL implementation of Thread repository."""

from typing import Collection, List, Optional

import logfire
from sqlalchemy import exists, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.error import PersistenceFault
from pinboard.domain.model import Thread
from pinboard.domain.repository import ThreadRepository
from pinboard.domain.value import ThreadId, UserId
from pinboard.persistence.mappers import row_to_thread, thread_to_dict
from pinboard.persistence.tables import threads_table


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        with logfire.span("thread_repository.find_by_id", thread_id=str(thread_id)):
            stmt = select(threads_table).where(threads_table.c.id == thread_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            return row_to_thread(dict(row)) if row else None

    async def exists(self, thread_id: ThreadId) -> bool:
        """Check whether a thread exists."""
        stmt = select(exists().where(threads_table.c.id == thread_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def find_all(
        self,
        search: Optional[str] = None,
        author_ids: Optional[Collection[UserId]] = None,
    ) -> List[Thread]:
        """Find threads for a feed, newest first."""
        with logfire.span(
            "thread_repository.find_all",
            search=search,
            author_count=len(author_ids) if author_ids is not None else None,
        ):
            stmt = select(threads_table)

            if search:
                stmt = stmt.where(
                    or_(
                        threads_table.c.title.icontains(search, autoescape=True),
                        threads_table.c.body.icontains(search, autoescape=True),
                    )
                )
            if author_ids is not None:
                if not author_ids:
                    return []
                stmt = stmt.where(threads_table.c.author_id.in_(list(author_ids)))

            stmt = stmt.order_by(threads_table.c.created_at.desc())
            result = await self.session.execute(stmt)
            threads = [row_to_thread(dict(row)) for row in result.mappings().all()]
            logfire.info("Found threads", count=len(threads))
            return threads

    async def save(self, thread: Thread) -> Thread:
        """Insert a thread.

        Raises:
            PersistenceFault: If the insert fails
        """
        with logfire.span("thread_repository.save", thread_id=str(thread.id)):
            try:
                await self.session.execute(
                    threads_table.insert().values(**thread_to_dict(thread))
                )
                await self.session.flush()
            except SQLAlchemyError as e:
                logfire.error("Failed to save thread", error=str(e))
                raise PersistenceFault("Failed to save thread") from e
            return thread
