"""In-memory direct message repository for testing."""

from datetime import datetime
from typing import Dict, List, Sequence

from pinboard.domain.model import DirectMessage
from pinboard.domain.repository import DirectMessageRepository
from pinboard.domain.value import UserId

from .store import InMemoryStore


class InMemoryDirectMessageRepository(DirectMessageRepository):
    """In-memory implementation of DirectMessageRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def save(self, message: DirectMessage) -> DirectMessage:
        self._store.direct_messages.append(message)
        return message

    async def find_conversation(
        self, user_id: UserId, other_id: UserId
    ) -> List[DirectMessage]:
        pair = {user_id, other_id}
        messages = [
            m
            for m in self._store.direct_messages
            if {m.sender_id, m.recipient_id} == pair
        ]
        return sorted(messages, key=lambda m: m.created_at)

    async def latest_by_partner(
        self, user_id: UserId, partner_ids: Sequence[UserId]
    ) -> Dict[UserId, DirectMessage]:
        partners = set(partner_ids)
        latest: Dict[UserId, DirectMessage] = {}
        for message in self._store.direct_messages:
            if message.sender_id == user_id:
                partner = message.recipient_id
            elif message.recipient_id == user_id:
                partner = message.sender_id
            else:
                continue
            if partner not in partners:
                continue
            current = latest.get(partner)
            if current is None or message.created_at >= current.created_at:
                latest[partner] = message
        return latest

    async def count_unread(self, recipient_id: UserId) -> int:
        return sum(
            1
            for m in self._store.direct_messages
            if m.recipient_id == recipient_id and m.read_at is None
        )

    async def count_unread_by_sender(
        self, recipient_id: UserId
    ) -> Dict[UserId, int]:
        counts: Dict[UserId, int] = {}
        for message in self._store.direct_messages:
            if message.recipient_id == recipient_id and message.read_at is None:
                counts[message.sender_id] = counts.get(message.sender_id, 0) + 1
        return counts

    async def mark_read_from(self, sender_id: UserId, recipient_id: UserId) -> int:
        now = datetime.now()
        changed = 0
        for i, message in enumerate(self._store.direct_messages):
            if (
                message.sender_id == sender_id
                and message.recipient_id == recipient_id
                and message.read_at is None
            ):
                self._store.direct_messages[i] = message.model_copy(
                    update={"read_at": now}
                )
                changed += 1
        return changed
