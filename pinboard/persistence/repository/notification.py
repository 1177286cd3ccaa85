"""PostgreSQL implementation of Notification repository."""

from datetime import datetime
from typing import AsyncContextManager, Collection, List, Optional

import logfire
from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.model import Notification
from pinboard.domain.repository import NotificationRepository
from pinboard.domain.value import NotificationId, NotificationType, UserId
from pinboard.persistence.mappers import notification_to_dict, row_to_notification
from pinboard.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _owned_by(self, recipient_id: UserId, exclude_types: Collection[NotificationType]):
        conditions = [notifications_table.c.recipient_id == recipient_id]
        if exclude_types:
            conditions.append(
                notifications_table.c.type.not_in([t.value for t in exclude_types])
            )
        return conditions

    def isolated(self) -> AsyncContextManager[object]:
        """Savepoint on the request session."""
        return self.session.begin_nested()

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification inside a savepoint.

        A failed insert rolls back only the savepoint; the caller's
        transaction stays usable.
        """
        async with self.isolated():
            await self.session.execute(
                notifications_table.insert().values(
                    **notification_to_dict(notification)
                )
            )
        return notification

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_notification(dict(row)) if row else None

    async def find_for_recipient(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
        unread_only: bool = False,
        limit: int = 50,
    ) -> List[Notification]:
        """List a user's notifications, newest first."""
        conditions = self._owned_by(recipient_id, exclude_types)
        if unread_only:
            conditions.append(notifications_table.c.read_at.is_(None))

        stmt = (
            select(notifications_table)
            .where(and_(*conditions))
            .order_by(notifications_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def count_unread(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> int:
        """Count unread notifications."""
        conditions = self._owned_by(recipient_id, exclude_types)
        conditions.append(notifications_table.c.read_at.is_(None))

        stmt = select(func.count()).select_from(notifications_table).where(
            and_(*conditions)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def mark_read(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> bool:
        """Set read_at on one unread notification owned by the user."""
        conditions = self._owned_by(recipient_id, exclude_types)
        conditions += [
            notifications_table.c.id == notification_id,
            notifications_table.c.read_at.is_(None),
        ]

        stmt = (
            update(notifications_table)
            .where(and_(*conditions))
            .values(read_at=datetime.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def mark_all_read(
        self,
        recipient_id: UserId,
        exclude_types: Collection[NotificationType] = (),
    ) -> int:
        """Set read_at on every unread notification the user owns."""
        conditions = self._owned_by(recipient_id, exclude_types)
        conditions.append(notifications_table.c.read_at.is_(None))

        stmt = (
            update(notifications_table)
            .where(and_(*conditions))
            .values(read_at=datetime.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        count = result.rowcount  # type: ignore[attr-defined]
        logfire.info("Marked notifications read", count=count)
        return count
