"""Direct message routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from pinboard.application.usecase.chat import (
    ListChatsRequest,
    ListChatsResponse,
    ListChatsUseCase,
    MessageItem,
    OpenConversationRequest,
    OpenConversationResponse,
    OpenConversationUseCase,
    SendMessageRequest,
    SendMessageUseCase,
)
from pinboard.domain.error import DomainError
from pinboard.domain.service import JWTService
from pinboard.interface.api.auth import require_user_id
from pinboard.interface.error import invalid_id, to_http_exception

router = APIRouter(prefix="/chats", tags=["chats"], route_class=DishkaRoute)


class SendMessageAPIRequest(BaseModel):
    """API request for sending a direct message.

    Length and emptiness are checked after trimming by the message service.
    """

    body: str | None = None
    shared_thread_id: str | None = None


@router.get("", response_model=ListChatsResponse)
async def list_chats(
    list_chats_use_case: FromDishka[ListChatsUseCase],
    jwt_service: FromDishka[JWTService],
    search: str | None = Query(default=None, max_length=100),
    auth_token: str | None = Cookie(default=None),
) -> ListChatsResponse:
    """List conversations with last message preview and unread counts."""
    user_id = require_user_id(jwt_service, auth_token, "view chats")

    try:
        return await list_chats_use_case.execute(
            ListChatsRequest(user_id=user_id, search=search)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{other_user_id}", response_model=OpenConversationResponse)
async def open_conversation(
    other_user_id: str,
    open_conversation_use_case: FromDishka[OpenConversationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> OpenConversationResponse:
    """Open a conversation.

    Marks the other user's unread messages to the caller as read.
    """
    user_id = require_user_id(jwt_service, auth_token, "view chats")

    try:
        return await open_conversation_use_case.execute(
            OpenConversationRequest(user_id=user_id, other_user_id=other_user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e


@router.post(
    "/{other_user_id}",
    response_model=MessageItem,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    other_user_id: str,
    request: SendMessageAPIRequest,
    send_message_use_case: FromDishka[SendMessageUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MessageItem:
    """Send a direct message, optionally sharing a thread."""
    user_id = require_user_id(jwt_service, auth_token, "send messages")

    try:
        return await send_message_use_case.execute(
            SendMessageRequest(
                sender_id=user_id,
                recipient_id=other_user_id,
                body=request.body,
                shared_thread_id=request.shared_thread_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e
