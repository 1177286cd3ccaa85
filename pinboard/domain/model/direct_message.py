"""Direct message entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import DirectMessageId, ThreadId, UserId


class DirectMessage(DomainModel):
    """Private message between two users.

    A message carries a text body, a shared thread, or both. Read state is
    set in bulk when the recipient opens the conversation.
    """

    id: DirectMessageId
    sender_id: UserId
    recipient_id: UserId
    body: Optional[str] = Field(default=None, max_length=2000)
    shared_thread_id: Optional[ThreadId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    read_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_content(self) -> "DirectMessage":
        """Validate that a body or shared thread is present."""
        if not self.body and self.shared_thread_id is None:
            raise ValueError("Message body or shared thread is required")
        if self.sender_id == self.recipient_id:
            raise ValueError("Sender and recipient must differ")
        return self
