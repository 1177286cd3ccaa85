"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from pinboard.domain.model import Response, Thread, User
from pinboard.domain.repository import (
    ResponseRepository,
    ThreadRepository,
    UserRepository,
)
from pinboard.domain.value import Handle, ResponseId, ThreadId, UserId

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed base time."""
    return BASE_TIME + timedelta(minutes=minutes)


async def make_user(env, handle: str, name: str = "") -> User:
    """Create and save a user in the test environment."""
    repo = await env.get(UserRepository)
    return await repo.save(
        User(id=UserId(uuid4()), handle=Handle(root=handle), name=name)
    )


async def make_thread(
    env,
    author: User,
    title: str = "Test thread",
    body: str = "Test body",
    created_at: datetime | None = None,
) -> Thread:
    """Create and save a thread without running fan-out."""
    repo = await env.get(ThreadRepository)
    return await repo.save(
        Thread(
            id=ThreadId(uuid4()),
            author_id=author.id,
            author_handle=author.handle,
            title=title,
            body=body,
            created_at=created_at or datetime.now(),
        )
    )


async def make_response(
    env,
    thread: Thread,
    author: User,
    body: str = "Test response",
    created_at: datetime | None = None,
) -> Response:
    """Create and save a response without running fan-out."""
    repo = await env.get(ResponseRepository)
    return await repo.save(
        Response(
            id=ResponseId(uuid4()),
            thread_id=thread.id,
            author_id=author.id,
            author_handle=author.handle,
            body=body,
            created_at=created_at or datetime.now(),
        )
    )
