"""Unit tests for FollowService."""

from uuid import uuid4

import pytest

from pinboard.domain.error import EntityNotFoundError, ValidationError
from pinboard.domain.repository import FollowRepository, NotificationRepository
from pinboard.domain.service import FollowService
from pinboard.domain.value import NotificationType, UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestFollow:
    """Tests for following users."""

    @pytest.mark.asyncio
    async def test_double_follow_notifies_once(self, unit_env):
        follow_service = await unit_env.get(FollowService)
        notification_repo = await unit_env.get(NotificationRepository)
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")

        first = await follow_service.follow(alice.id, bob.id)
        second = await follow_service.follow(alice.id, bob.id)

        assert first.created is True
        assert second.created is False
        assert second.following is True
        notifications = await notification_repo.find_for_recipient(bob.id)
        assert [n.type for n in notifications] == [NotificationType.FOLLOW]

    @pytest.mark.asyncio
    async def test_cannot_follow_self(self, unit_env):
        follow_service = await unit_env.get(FollowService)
        alice = await make_user(unit_env, "alice")

        with pytest.raises(ValidationError):
            await follow_service.follow(alice.id, alice.id)

    @pytest.mark.asyncio
    async def test_follow_missing_user(self, unit_env):
        follow_service = await unit_env.get(FollowService)
        follow_repo = await unit_env.get(FollowRepository)
        alice = await make_user(unit_env, "alice")
        missing = UserId(uuid4())

        with pytest.raises(EntityNotFoundError):
            await follow_service.follow(alice.id, missing)

        assert await follow_repo.find_following_ids(alice.id) == []

    @pytest.mark.asyncio
    async def test_unfollow_then_follow_again_notifies_again(self, unit_env):
        follow_service = await unit_env.get(FollowService)
        notification_repo = await unit_env.get(NotificationRepository)
        alice = await make_user(unit_env, "alice")
        bob = await make_user(unit_env, "bob")

        await follow_service.follow(alice.id, bob.id)
        assert await follow_service.unfollow(alice.id, bob.id) is True
        assert await follow_service.unfollow(alice.id, bob.id) is False
        await follow_service.follow(alice.id, bob.id)

        assert len(await notification_repo.find_for_recipient(bob.id)) == 2
