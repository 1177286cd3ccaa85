"""Open conversation use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.model import DirectMessage
from pinboard.domain.service import MessageService
from pinboard.domain.value import UserId


class MessageItem(BaseModel):
    """Direct message in a conversation."""

    message_id: str
    sender_id: str
    recipient_id: str
    body: str | None
    shared_thread_id: str | None
    created_at: datetime
    read_at: datetime | None

    @classmethod
    def from_message(cls, message: DirectMessage) -> "MessageItem":
        return cls(
            message_id=str(message.id),
            sender_id=str(message.sender_id),
            recipient_id=str(message.recipient_id),
            body=message.body,
            shared_thread_id=(
                str(message.shared_thread_id) if message.shared_thread_id else None
            ),
            created_at=message.created_at,
            read_at=message.read_at,
        )


class OpenConversationRequest(BaseModel):
    """Open conversation request."""

    user_id: str  # Viewer
    other_user_id: str


class OpenConversationResponse(BaseModel):
    """Open conversation response."""

    user_id: str
    handle: str
    name: str
    messages: list[MessageItem]
    marked_read: int


class OpenConversationUseCase:
    """Use case for reading a conversation (marks incoming messages read)."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(
        self, request: OpenConversationRequest
    ) -> OpenConversationResponse:
        conversation = await self.message_service.open_conversation(
            UserId(UUID(request.user_id)), UserId(UUID(request.other_user_id))
        )
        return OpenConversationResponse(
            user_id=str(conversation.user.id),
            handle=conversation.user.handle.root,
            name=conversation.user.name,
            messages=[MessageItem.from_message(m) for m in conversation.messages],
            marked_read=conversation.marked_read,
        )
