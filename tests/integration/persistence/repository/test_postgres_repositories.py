"""Integration tests for the PostgreSQL repositories.

Assume a migrated PostgreSQL database reachable at DATABASE__URL. Run with
``pytest -m integration``.
"""

from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.domain.model import Follow, Notification, Response, Thread, User, Vote
from pinboard.domain.repository import (
    FollowRepository,
    NotificationRepository,
    ResponseRepository,
    ThreadRepository,
    UserRepository,
    VoteRepository,
)
from pinboard.domain.service import NotificationService
from pinboard.domain.value import (
    FollowId,
    Handle,
    NotificationEntityType,
    NotificationId,
    NotificationType,
    ResponseId,
    ThreadId,
    UserId,
    VotableType,
    VoteId,
    VoteValue,
)
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _user(env) -> User:
    repo = await env.get(UserRepository)
    # Unique per run; the database outlives the test
    return await repo.save(
        User(id=UserId(uuid4()), handle=Handle(root=f"u{uuid4().hex[:12]}"))
    )


async def _thread(env, author: User) -> Thread:
    repo = await env.get(ThreadRepository)
    return await repo.save(
        Thread(
            id=ThreadId(uuid4()),
            author_id=author.id,
            author_handle=author.handle,
            title="Integration thread",
            body="Body",
        )
    )


class TestPostgresVoteRepository:
    """Vote upsert and ledger sums."""

    @pytest.mark.asyncio
    async def test_upsert_overwrites_value(self, integration_env):
        vote_repo = await integration_env.get(VoteRepository)
        author = await _user(integration_env)
        voter = await _user(integration_env)
        thread = await _thread(integration_env, author)

        for value in (VoteValue.UP, VoteValue.DOWN):
            await vote_repo.upsert(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=voter.id,
                    votable_type=VotableType.THREAD,
                    votable_id=thread.id,
                    value=value,
                )
            )

        assert await vote_repo.tally(VotableType.THREAD, thread.id) == (0, 1)
        votes = await vote_repo.find_by_votable(VotableType.THREAD, thread.id)
        assert len(votes) == 1


class TestPostgresFollowRepository:
    """Follow insert-if-absent."""

    @pytest.mark.asyncio
    async def test_second_add_reports_no_insert(self, integration_env):
        follow_repo = await integration_env.get(FollowRepository)
        alice = await _user(integration_env)
        bob = await _user(integration_env)

        def follow() -> Follow:
            return Follow(id=FollowId(uuid4()), follower_id=alice.id, following_id=bob.id)

        assert await follow_repo.add(follow()) is True
        assert await follow_repo.add(follow()) is False
        assert await follow_repo.find_following_ids(alice.id) == [bob.id]


class TestPostgresNotificationRepository:
    """Unread counting with type exclusion."""

    @pytest.mark.asyncio
    async def test_excluded_types_are_not_counted_or_marked(self, integration_env):
        notification_repo = await integration_env.get(NotificationRepository)
        alice = await _user(integration_env)
        bob = await _user(integration_env)

        for type, entity_type in (
            (NotificationType.FOLLOW, NotificationEntityType.USER),
            (NotificationType.DIRECT_MESSAGE, NotificationEntityType.MESSAGE),
        ):
            await notification_repo.save(
                Notification(
                    id=NotificationId(uuid4()),
                    recipient_id=bob.id,
                    actor_id=alice.id,
                    type=type,
                    entity_type=entity_type,
                    entity_id=uuid4(),
                    message="test",
                    created_at=datetime.now(),
                )
            )

        excluded = {NotificationType.DIRECT_MESSAGE}
        assert await notification_repo.count_unread(bob.id, exclude_types=excluded) == 1
        assert await notification_repo.mark_all_read(bob.id, exclude_types=excluded) == 1
        assert await notification_repo.count_unread(bob.id) == 1


class TestFanOutSavepoint:
    """A failed mention lookup must not abort the request transaction."""

    @pytest.mark.asyncio
    async def test_failed_lookup_keeps_response_and_reply(
        self, integration_env, monkeypatch
    ):
        session = await integration_env.get(AsyncSession)
        notification_service = await integration_env.get(NotificationService)
        response_repo = await integration_env.get(ResponseRepository)
        notification_repo = await integration_env.get(NotificationRepository)
        author = await _user(integration_env)
        replier = await _user(integration_env)
        thread = await _thread(integration_env, author)
        response = await response_repo.save(
            Response(
                id=ResponseId(uuid4()),
                thread_id=thread.id,
                author_id=replier.id,
                author_handle=replier.handle,
                body=f"cc @{author.handle.root}",
            )
        )

        async def failing_lookup(*texts):
            # Division by zero aborts the current Postgres transaction
            await session.execute(text("SELECT 1 / 0"))

        monkeypatch.setattr(
            notification_service.mention_service, "resolve_mentions", failing_lookup
        )

        created = await notification_service.notify_reply(thread, response, replier)

        assert [n.type for n in created] == [NotificationType.REPLY]
        assert await response_repo.find_by_id(response.id) is not None
        notes = await notification_repo.find_for_recipient(author.id)
        assert [n.type for n in notes] == [NotificationType.REPLY]


class TestPostgresUserSearch:
    """Chat search treats LIKE wildcards literally."""

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, integration_env):
        user_repo = await integration_env.get(UserRepository)
        viewer = await _user(integration_env)
        plain = await user_repo.save(
            User(
                id=UserId(uuid4()),
                handle=Handle(root=f"p{uuid4().hex[:12]}"),
                name="Plain Name",
            )
        )

        results = await user_repo.search(viewer.id, query="%", handle_query="_")

        assert plain.id not in {u.id for u in results}


class TestPostgresReadTimestamps:
    """read_at is written with the same clock as created_at."""

    @pytest.mark.asyncio
    async def test_read_at_not_before_created_at(self, integration_env):
        notification_repo = await integration_env.get(NotificationRepository)
        alice = await _user(integration_env)
        bob = await _user(integration_env)
        notification = await notification_repo.save(
            Notification(
                id=NotificationId(uuid4()),
                recipient_id=bob.id,
                actor_id=alice.id,
                type=NotificationType.FOLLOW,
                entity_type=NotificationEntityType.USER,
                entity_id=alice.id,
                message="test",
                created_at=datetime.now(),
            )
        )

        assert await notification_repo.mark_read(notification.id, bob.id) is True
        stored = await notification_repo.find_by_id(notification.id)

        assert stored is not None
        assert stored.read_at is not None
        assert stored.read_at >= stored.created_at
