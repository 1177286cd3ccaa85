"""Direct message domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from pinboard.domain.error import EntityNotFoundError, ValidationError
from pinboard.domain.model import DirectMessage, User
from pinboard.domain.repository import (
    DirectMessageRepository,
    ThreadRepository,
    UserRepository,
)
from pinboard.domain.value import DirectMessageId, ThreadId, UserId
from pinboard.domain.value.common import ValueObject

from .base import Service
from .notification_service import NotificationService
from .unread_service import UnreadService
from .user_service import UserService

MAX_MESSAGE_LENGTH = 2000


class ChatSummary(ValueObject):
    """One row of the chat list."""

    user: User
    last_message: Optional[str] = None
    last_message_at: Optional[datetime] = None
    unread_count: int = 0


class Conversation(ValueObject):
    """An opened conversation with another user."""

    user: User
    messages: list[DirectMessage]
    marked_read: int = 0


class MessageService(Service):
    """Domain service for direct messages between users."""

    def __init__(
        self,
        direct_message_repository: DirectMessageRepository,
        user_repository: UserRepository,
        thread_repository: ThreadRepository,
        user_service: UserService,
        unread_service: UnreadService,
        notification_service: NotificationService,
    ) -> None:
        self.direct_message_repository = direct_message_repository
        self.user_repository = user_repository
        self.thread_repository = thread_repository
        self.user_service = user_service
        self.unread_service = unread_service
        self.notification_service = notification_service

    async def send(
        self,
        sender_id: UserId,
        recipient_id: UserId,
        body: str | None = None,
        shared_thread_id: ThreadId | None = None,
    ) -> DirectMessage:
        """Send a direct message.

        Args:
            sender_id: Sending user
            recipient_id: Receiving user
            body: Message text, trimmed before validation
            shared_thread_id: Optional thread to share

        Returns:
            Stored message

        Raises:
            ValidationError: Messaging yourself, empty message, or body too long
            EntityNotFoundError: Unknown recipient or shared thread
        """
        if sender_id == recipient_id:
            raise ValidationError("You cannot message yourself")

        text = (body or "").strip()
        if not text and shared_thread_id is None:
            raise ValidationError("Message body is required")
        if len(text) > MAX_MESSAGE_LENGTH:
            raise ValidationError(
                f"Message must be at most {MAX_MESSAGE_LENGTH} characters"
            )

        with logfire.span(
            "message_service.send",
            sender_id=str(sender_id),
            recipient_id=str(recipient_id),
        ):
            await self.user_service.get_by_id(recipient_id)
            sender = await self.user_service.get_by_id(sender_id)

            if shared_thread_id is not None and not await self.thread_repository.exists(
                shared_thread_id
            ):
                raise EntityNotFoundError("Thread", str(shared_thread_id))

            message = await self.direct_message_repository.save(
                DirectMessage(
                    id=DirectMessageId(uuid4()),
                    sender_id=sender_id,
                    recipient_id=recipient_id,
                    body=text or None,
                    shared_thread_id=shared_thread_id,
                    created_at=datetime.now(),
                )
            )
            logfire.info("Message sent", message_id=str(message.id))

            await self.notification_service.notify_direct_message(message, sender)
            return message

    async def _preview(self, message: DirectMessage) -> str:
        if message.shared_thread_id is None:
            return message.body or ""
        if message.body:
            return f"Shared post: {message.body}"
        thread = await self.thread_repository.find_by_id(message.shared_thread_id)
        title = thread.title if thread else "Untitled"
        return f"Shared post: {title}"

    async def list_chats(
        self, viewer_id: UserId, search: str | None = None
    ) -> list[ChatSummary]:
        """List every other user as a potential conversation.

        Conversations with messages come first, most recent first; the rest
        are ordered by name.

        Args:
            viewer_id: Viewing user
            search: Matches name, or handle with any leading @ removed

        Returns:
            Chat summaries
        """
        query = (search or "").strip().lower()
        handle_query = query.lstrip("@")

        with logfire.span("message_service.list_chats", viewer_id=str(viewer_id)):
            users = await self.user_repository.search(
                viewer_id, query=query, handle_query=handle_query
            )
            partner_ids = [user.id for user in users]

            latest = await self.direct_message_repository.latest_by_partner(
                viewer_id, partner_ids
            )
            unread = await self.unread_service.unread_messages_by_sender(viewer_id)

            summaries = []
            for user in users:
                message = latest.get(user.id)
                summaries.append(
                    ChatSummary(
                        user=user,
                        last_message=await self._preview(message) if message else None,
                        last_message_at=message.created_at if message else None,
                        unread_count=unread.get(user.id, 0),
                    )
                )

            def display_name(summary: ChatSummary) -> str:
                return (summary.user.name or summary.user.handle.root).lower()

            with_messages = sorted(
                (s for s in summaries if s.last_message_at is not None),
                key=lambda s: s.last_message_at,
                reverse=True,
            )
            without_messages = sorted(
                (s for s in summaries if s.last_message_at is None), key=display_name
            )

            logfire.info("Chats listed", count=len(summaries))
            return with_messages + without_messages

    async def open_conversation(
        self, viewer_id: UserId, other_id: UserId
    ) -> Conversation:
        """Open a conversation, marking the other user's messages as read.

        Raises:
            ValidationError: If the viewer opens a conversation with themselves
            EntityNotFoundError: If the other user does not exist
        """
        if viewer_id == other_id:
            raise ValidationError("You cannot message yourself")

        with logfire.span(
            "message_service.open_conversation",
            viewer_id=str(viewer_id),
            other_id=str(other_id),
        ):
            other = await self.user_service.get_by_id(other_id)
            marked = await self.unread_service.mark_conversation_read(
                viewer_id, other_id
            )
            messages = await self.direct_message_repository.find_conversation(
                viewer_id, other_id
            )
            return Conversation(user=other, messages=messages, marked_read=marked)
