"""Send message use case."""

from uuid import UUID

from pydantic import BaseModel

from pinboard.application.usecase.base import BaseUseCase
from pinboard.domain.service import MessageService
from pinboard.domain.value import ThreadId, UserId

from .open_conversation import MessageItem


class SendMessageRequest(BaseModel):
    """Send message request."""

    sender_id: str  # User ID from authenticated user
    recipient_id: str
    body: str | None = None
    shared_thread_id: str | None = None


class SendMessageUseCase(BaseUseCase):
    """Use case for sending a direct message."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: SendMessageRequest) -> MessageItem:
        """Execute send message flow.

        Raises:
            ValidationError: Self message, empty message or body too long
            EntityNotFoundError: Unknown recipient or shared thread
        """
        shared_thread_id = (
            ThreadId(UUID(request.shared_thread_id))
            if request.shared_thread_id
            else None
        )
        message = await self.message_service.send(
            sender_id=UserId(UUID(request.sender_id)),
            recipient_id=UserId(UUID(request.recipient_id)),
            body=request.body,
            shared_thread_id=shared_thread_id,
        )
        return MessageItem.from_message(message)
