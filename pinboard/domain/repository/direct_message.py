"""Direct message repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from pinboard.domain.model.direct_message import DirectMessage
from pinboard.domain.value import UserId


class DirectMessageRepository(ABC):
    """Repository for DirectMessage records."""

    @abstractmethod
    async def save(self, message: DirectMessage) -> DirectMessage:
        """Insert a message."""
        pass

    @abstractmethod
    async def find_conversation(
        self, user_id: UserId, other_id: UserId
    ) -> List[DirectMessage]:
        """Find all messages exchanged between two users, oldest first."""
        pass

    @abstractmethod
    async def latest_by_partner(
        self, user_id: UserId, partner_ids: Sequence[UserId]
    ) -> Dict[UserId, DirectMessage]:
        """Find the most recent message in each conversation.

        Args:
            user_id: The viewer
            partner_ids: Other participants to check

        Returns:
            Mapping of partner ID to the latest message either way;
            partners without messages are omitted
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UserId) -> int:
        """Count unread messages addressed to the user."""
        pass

    @abstractmethod
    async def count_unread_by_sender(
        self, recipient_id: UserId
    ) -> Dict[UserId, int]:
        """Count unread messages addressed to the user, grouped by sender."""
        pass

    @abstractmethod
    async def mark_read_from(self, sender_id: UserId, recipient_id: UserId) -> int:
        """Mark every unread message from sender to recipient as read.

        Returns:
            Number of messages changed
        """
        pass
