"""List chats use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import MessageService
from pinboard.domain.value import UserId


class ChatListItem(BaseModel):
    """One conversation partner in the chat list."""

    user_id: str
    handle: str
    name: str
    last_message: str | None
    last_message_at: datetime | None
    unread_count: int


class ListChatsRequest(BaseModel):
    """List chats request."""

    user_id: str
    search: str | None = None


class ListChatsResponse(BaseModel):
    """List chats response."""

    chats: list[ChatListItem]
    total_unread: int


class ListChatsUseCase:
    """Use case for listing conversations with per-conversation unread counts."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: ListChatsRequest) -> ListChatsResponse:
        """Execute list chats flow.

        ``total_unread`` is the sum over the listed conversations; a search
        therefore narrows it too.
        """
        summaries = await self.message_service.list_chats(
            UserId(UUID(request.user_id)), request.search
        )

        chats = [
            ChatListItem(
                user_id=str(summary.user.id),
                handle=summary.user.handle.root,
                name=summary.user.name,
                last_message=summary.last_message,
                last_message_at=summary.last_message_at,
                unread_count=summary.unread_count,
            )
            for summary in summaries
        ]
        return ListChatsResponse(
            chats=chats, total_unread=sum(chat.unread_count for chat in chats)
        )
