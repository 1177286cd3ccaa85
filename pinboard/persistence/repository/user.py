"""PostgreSQL implementation of User repository."""

from typing import Collection, List, Optional

import logfire
from sqlalchemy import and_, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.error import ConflictError, PersistenceFault
from pinboard.domain.model import User
from pinboard.domain.repository import UserRepository
from pinboard.domain.value import Handle, UserId
from pinboard.persistence.mappers import row_to_user, user_to_dict
from pinboard.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by handle."""
        stmt = select(users_table).where(users_table.c.handle == handle.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_handles(self, handles: Collection[str]) -> List[User]:
        """Find users by handle in a single query."""
        if not handles:
            return []

        stmt = select(users_table).where(
            users_table.c.handle.in_([h.lower() for h in handles])
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def search(
        self, exclude_id: UserId, query: str = "", handle_query: str = ""
    ) -> List[User]:
        """Find other users whose name or handle contains the query."""
        conditions = [users_table.c.id != exclude_id]

        matches = []
        if query:
            matches.append(users_table.c.name.icontains(query, autoescape=True))
        if handle_query:
            matches.append(
                users_table.c.handle.contains(handle_query.lower(), autoescape=True)
            )
        if matches:
            conditions.append(or_(*matches))

        stmt = (
            select(users_table)
            .where(and_(*conditions))
            .order_by(func.lower(users_table.c.name), users_table.c.handle)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Insert or update a user.

        Raises:
            ConflictError: If the handle belongs to another user
            PersistenceFault: On any other database failure
        """
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={"handle": stmt.excluded.handle, "name": stmt.excluded.name},
        )

        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            logfire.warn("Handle already taken", handle=user.handle.root)
            raise ConflictError(f"Handle already taken: {user.handle.root}") from e
        except SQLAlchemyError as e:
            logfire.error("Failed to save user", user_id=str(user.id), error=str(e))
            raise PersistenceFault("Failed to save user") from e

        return user
