"""Unit tests for UnreadService."""

from datetime import datetime
from uuid import uuid4

import pytest

from pinboard.domain.model import DirectMessage
from pinboard.domain.repository import DirectMessageRepository
from pinboard.domain.service import NotificationService, UnreadService
from pinboard.domain.value import DirectMessageId, NotificationId
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _send(env, sender, recipient, body="hi"):
    repo = await env.get(DirectMessageRepository)
    return await repo.save(
        DirectMessage(
            id=DirectMessageId(uuid4()),
            sender_id=sender.id,
            recipient_id=recipient.id,
            body=body,
            created_at=datetime.now(),
        )
    )


class TestNotificationUnread:
    """Tests for the general notification channel."""

    @pytest.mark.asyncio
    async def test_mark_all_read_clears_count(self, unit_env):
        unread_service = await unit_env.get(UnreadService)
        notification_service = await unit_env.get(NotificationService)
        bob = await make_user(unit_env, "bob")
        for handle in ("alice", "carol", "dave"):
            follower = await make_user(unit_env, handle)
            await notification_service.notify_follow(follower, bob.id)

        assert await unread_service.unread_notification_count(bob.id) == 3
        assert await unread_service.mark_all_read(bob.id) == 3
        assert await unread_service.unread_notification_count(bob.id) == 0
        # Already read
        assert await unread_service.mark_all_read(bob.id) == 0

    @pytest.mark.asyncio
    async def test_direct_message_notifications_not_counted(self, unit_env):
        unread_service = await unit_env.get(UnreadService)
        notification_service = await unit_env.get(NotificationService)
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")
        message = await _send(unit_env, alice, bob)
        await notification_service.notify_direct_message(message, alice)

        assert await unread_service.unread_notification_count(bob.id) == 0
        assert await unread_service.mark_all_read(bob.id) == 0
        assert await unread_service.unread_message_count(bob.id) == 1

    @pytest.mark.asyncio
    async def test_mark_one_read(self, unit_env):
        unread_service = await unit_env.get(UnreadService)
        notification_service = await unit_env.get(NotificationService)
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")
        notification = await notification_service.notify_follow(alice, bob.id)

        assert await unread_service.mark_one_read(notification.id, bob.id) is True
        assert await unread_service.mark_one_read(notification.id, bob.id) is False
        assert await unread_service.unread_notification_count(bob.id) == 0

    @pytest.mark.asyncio
    async def test_mark_one_read_ignores_other_users(self, unit_env):
        unread_service = await unit_env.get(UnreadService)
        notification_service = await unit_env.get(NotificationService)
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")
        notification = await notification_service.notify_follow(alice, bob.id)

        assert await unread_service.mark_one_read(notification.id, alice.id) is False
        assert await unread_service.mark_one_read(NotificationId(uuid4()), bob.id) is False
        assert await unread_service.unread_notification_count(bob.id) == 1


class TestMessageUnread:
    """Tests for the direct message channel."""

    @pytest.mark.asyncio
    async def test_counts_by_sender_and_conversation_read(self, unit_env):
        unread_service = await unit_env.get(UnreadService)
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")
        carol = await make_user(unit_env, "carol")
        await _send(unit_env, alice, bob, "one")
        await _send(unit_env, alice, bob, "two")
        await _send(unit_env, carol, bob, "three")
        # Outgoing messages never count for the sender
        await _send(unit_env, bob, alice, "reply")

        assert await unread_service.unread_message_count(bob.id) == 3
        assert await unread_service.unread_messages_by_sender(bob.id) == {
            alice.id: 2,
            carol.id: 1,
        }

        assert await unread_service.mark_conversation_read(bob.id, alice.id) == 2
        assert await unread_service.unread_messages_by_sender(bob.id) == {carol.id: 1}
        assert await unread_service.unread_message_count(alice.id) == 1
