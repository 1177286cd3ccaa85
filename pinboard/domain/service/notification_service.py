"""Notification fan-out domain service."""

from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID, uuid4

import logfire

from pinboard.config import NotificationSettings
from pinboard.domain.model import DirectMessage, Notification, Response, Thread, User
from pinboard.domain.repository import NotificationRepository
from pinboard.domain.value import (
    NotificationEntityType,
    NotificationId,
    NotificationType,
    ThreadId,
    UserId,
)

from .base import Service
from .mention_service import MentionService

# Types kept out of the general notification list and its unread badge.
# Direct messages are surfaced through the chat unread channel instead.
FEED_EXCLUDED_TYPES = frozenset({NotificationType.DIRECT_MESSAGE})


class NotificationService(Service):
    """Creates notifications as a side effect of user actions.

    Fan-out is best effort: every failure is logged and swallowed so the
    action that triggered it always completes. Actors never notify
    themselves.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        mention_service: MentionService,
        notification_settings: NotificationSettings,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            mention_service: Mention resolver
            notification_settings: Notification settings
        """
        self.notification_repository = notification_repository
        self.mention_service = mention_service
        self.settings = notification_settings

    def _preview(self, title: str) -> str:
        limit = self.settings.title_preview_length
        if len(title) <= limit:
            return title
        return title[: limit - 3].rstrip() + "..."

    async def _deliver(
        self,
        recipient_id: UserId,
        actor: User,
        type: NotificationType,
        entity_type: NotificationEntityType,
        entity_id: UUID,
        message: str,
        thread_id: Optional[ThreadId] = None,
    ) -> Notification | None:
        if recipient_id == actor.id:
            return None

        try:
            notification = Notification(
                id=NotificationId(uuid4()),
                recipient_id=recipient_id,
                actor_id=actor.id,
                type=type,
                entity_type=entity_type,
                entity_id=entity_id,
                thread_id=thread_id,
                message=message,
                created_at=datetime.now(),
            )
            saved = await self.notification_repository.save(notification)
            logfire.info(
                "Notification created",
                notification_id=str(saved.id),
                type=type.value,
                recipient_id=str(recipient_id),
            )
            return saved
        except Exception:
            logfire.exception(
                "Notification delivery failed",
                type=type.value,
                recipient_id=str(recipient_id),
                entity_id=str(entity_id),
            )
            return None

    async def _notify_mentions(
        self,
        actor: User,
        texts: Iterable[str | None],
        entity_type: NotificationEntityType,
        entity_id: UUID,
        thread: Thread,
        skip: set[UserId],
    ) -> list[Notification]:
        # The lookup shares the caller's transaction; a failed query must
        # only roll back its own savepoint.
        try:
            async with self.notification_repository.isolated():
                mentioned = await self.mention_service.resolve_mentions(*texts)
        except Exception:
            logfire.exception("Mention resolution failed", entity_id=str(entity_id))
            return []

        message = f'@{actor.handle.root} mentioned you in "{self._preview(thread.title)}"'
        created = []
        for user_id in sorted(mentioned, key=str):
            if user_id in skip:
                continue
            notification = await self._deliver(
                recipient_id=user_id,
                actor=actor,
                type=NotificationType.MENTION,
                entity_type=entity_type,
                entity_id=entity_id,
                message=message,
                thread_id=thread.id,
            )
            if notification:
                created.append(notification)
        return created

    async def notify_thread_mentions(self, thread: Thread, actor: User) -> list[Notification]:
        """Notify users mentioned in a new thread's title or body.

        Args:
            thread: The new thread
            actor: Its author

        Returns:
            Notifications created
        """
        with logfire.span("notification_service.notify_thread_mentions", thread_id=str(thread.id)):
            return await self._notify_mentions(
                actor=actor,
                texts=(thread.title, thread.body),
                entity_type=NotificationEntityType.THREAD,
                entity_id=thread.id,
                thread=thread,
                skip=set(),
            )

    async def notify_reply(
        self, thread: Thread, response: Response, actor: User
    ) -> list[Notification]:
        """Notify the thread author and anyone mentioned in a new response.

        The thread author receives a single reply notification even if the
        response also mentions them.

        Args:
            thread: Thread the response belongs to
            response: The new response
            actor: Its author

        Returns:
            Notifications created
        """
        with logfire.span(
            "notification_service.notify_reply",
            thread_id=str(thread.id),
            response_id=str(response.id),
        ):
            created = []
            reply = await self._deliver(
                recipient_id=thread.author_id,
                actor=actor,
                type=NotificationType.REPLY,
                entity_type=NotificationEntityType.RESPONSE,
                entity_id=response.id,
                message=(
                    f'@{actor.handle.root} replied to your thread '
                    f'"{self._preview(thread.title)}"'
                ),
                thread_id=thread.id,
            )
            if reply:
                created.append(reply)

            created.extend(
                await self._notify_mentions(
                    actor=actor,
                    texts=(response.body,),
                    entity_type=NotificationEntityType.RESPONSE,
                    entity_id=response.id,
                    thread=thread,
                    skip={thread.author_id},
                )
            )
            return created

    async def notify_follow(self, follower: User, following_id: UserId) -> Notification | None:
        """Notify a user that someone started following them."""
        with logfire.span("notification_service.notify_follow", following_id=str(following_id)):
            return await self._deliver(
                recipient_id=following_id,
                actor=follower,
                type=NotificationType.FOLLOW,
                entity_type=NotificationEntityType.USER,
                entity_id=follower.id,
                message=f"@{follower.handle.root} started following you",
            )

    async def notify_direct_message(
        self, message: DirectMessage, actor: User
    ) -> Notification | None:
        """Record a direct message notification.

        These are excluded from the general list and badge; the chat unread
        count is the user-facing signal.
        """
        with logfire.span("notification_service.notify_direct_message", message_id=str(message.id)):
            return await self._deliver(
                recipient_id=message.recipient_id,
                actor=actor,
                type=NotificationType.DIRECT_MESSAGE,
                entity_type=NotificationEntityType.MESSAGE,
                entity_id=message.id,
                message=f"@{actor.handle.root} sent you a message",
                thread_id=message.shared_thread_id,
            )

    async def list_notifications(
        self, user_id: UserId, unread_only: bool = False, limit: int | None = None
    ) -> list[Notification]:
        """List a user's notifications, newest first.

        Args:
            user_id: Recipient
            unread_only: Only unread notifications
            limit: Maximum results, clamped to the configured range

        Returns:
            Notifications, direct message notifications excluded
        """
        if limit is None:
            limit = self.settings.default_limit
        limit = max(1, min(limit, self.settings.max_limit))

        with logfire.span(
            "notification_service.list_notifications",
            user_id=str(user_id),
            unread_only=unread_only,
            limit=limit,
        ):
            return await self.notification_repository.find_for_recipient(
                user_id,
                exclude_types=FEED_EXCLUDED_TYPES,
                unread_only=unread_only,
                limit=limit,
            )
