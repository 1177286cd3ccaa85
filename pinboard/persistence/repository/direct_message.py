"""PostgreSQL implementation of DirectMessage repository."""

from datetime import datetime
from typing import Dict, List, Sequence

import logfire
from sqlalchemy import and_, case, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.error import PersistenceFault
from pinboard.domain.model import DirectMessage
from pinboard.domain.repository import DirectMessageRepository
from pinboard.domain.value import UserId
from pinboard.persistence.mappers import direct_message_to_dict, row_to_direct_message
from pinboard.persistence.tables import direct_messages_table

dm = direct_messages_table


class PostgresDirectMessageRepository(DirectMessageRepository):
    """PostgreSQL implementation of DirectMessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, message: DirectMessage) -> DirectMessage:
        """Insert a message.

        Raises:
            PersistenceFault: If the insert fails
        """
        try:
            await self.session.execute(
                dm.insert().values(**direct_message_to_dict(message))
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error("Failed to save message", error=str(e))
            raise PersistenceFault("Failed to send message") from e
        return message

    async def find_conversation(
        self, user_id: UserId, other_id: UserId
    ) -> List[DirectMessage]:
        """Find all messages between two users, oldest first."""
        stmt = (
            select(dm)
            .where(
                or_(
                    and_(dm.c.sender_id == user_id, dm.c.recipient_id == other_id),
                    and_(dm.c.sender_id == other_id, dm.c.recipient_id == user_id),
                )
            )
            .order_by(dm.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_direct_message(dict(row)) for row in result.mappings().all()]

    async def latest_by_partner(
        self, user_id: UserId, partner_ids: Sequence[UserId]
    ) -> Dict[UserId, DirectMessage]:
        """Find the newest message per conversation with DISTINCT ON."""
        if not partner_ids:
            return {}

        partner = case(
            (dm.c.sender_id == user_id, dm.c.recipient_id), else_=dm.c.sender_id
        ).label("partner_id")
        partners = list(partner_ids)

        stmt = (
            select(partner, dm)
            .where(
                or_(
                    and_(dm.c.sender_id == user_id, dm.c.recipient_id.in_(partners)),
                    and_(dm.c.recipient_id == user_id, dm.c.sender_id.in_(partners)),
                )
            )
            .distinct(partner)
            .order_by(partner, dm.c.created_at.desc())
        )
        result = await self.session.execute(stmt)

        latest = {}
        for row in result.mappings().all():
            values = dict(row)
            partner_id = values.pop("partner_id")
            latest[UserId(partner_id)] = row_to_direct_message(values)
        return latest

    async def count_unread(self, recipient_id: UserId) -> int:
        """Count unread messages addressed to the user."""
        stmt = (
            select(func.count())
            .select_from(dm)
            .where(and_(dm.c.recipient_id == recipient_id, dm.c.read_at.is_(None)))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_unread_by_sender(
        self, recipient_id: UserId
    ) -> Dict[UserId, int]:
        """Count unread messages grouped by sender."""
        stmt = (
            select(dm.c.sender_id, func.count())
            .where(and_(dm.c.recipient_id == recipient_id, dm.c.read_at.is_(None)))
            .group_by(dm.c.sender_id)
        )
        result = await self.session.execute(stmt)
        return {UserId(sender_id): count for sender_id, count in result.all()}

    async def mark_read_from(self, sender_id: UserId, recipient_id: UserId) -> int:
        """Mark unread messages from sender to recipient as read."""
        stmt = (
            update(dm)
            .where(
                and_(
                    dm.c.sender_id == sender_id,
                    dm.c.recipient_id == recipient_id,
                    dm.c.read_at.is_(None),
                )
            )
            .values(read_at=datetime.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
