"""Chat use cases."""

from .list_chats import ChatListItem, ListChatsRequest, ListChatsResponse, ListChatsUseCase
from .open_conversation import (
    MessageItem,
    OpenConversationRequest,
    OpenConversationResponse,
    OpenConversationUseCase,
)
from .send_message import SendMessageRequest, SendMessageUseCase

__all__ = [
    "ChatListItem",
    "ListChatsRequest",
    "ListChatsResponse",
    "ListChatsUseCase",
    "MessageItem",
    "OpenConversationRequest",
    "OpenConversationResponse",
    "OpenConversationUseCase",
    "SendMessageRequest",
    "SendMessageUseCase",
]
