"""Thread domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from pinboard.domain.error import ValidationError
from pinboard.domain.model import Thread, User
from pinboard.domain.repository import ThreadRepository
from pinboard.domain.value import ThreadId

from .base import Service


class ThreadService(Service):
    """Domain service for thread operations."""

    def __init__(self, thread_repository: ThreadRepository) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Thread repository
        """
        self.thread_repository = thread_repository

    async def create_thread(
        self, author: User, title: str, body: str, board_slug: str = "general"
    ) -> Thread:
        """Create a thread.

        Args:
            author: Authoring user
            title: Thread title
            body: Thread body
            board_slug: Board the thread is posted to

        Returns:
            Created thread
        """
        title = title.strip()
        body = body.strip()
        if not title or not body:
            raise ValidationError("Thread title and body are required")

        with logfire.span(
            "thread_service.create_thread",
            author_id=str(author.id),
            board_slug=board_slug,
        ):
            thread = Thread(
                id=ThreadId(uuid4()),
                board_slug=board_slug,
                author_id=author.id,
                author_handle=author.handle,
                title=title,
                body=body,
                created_at=datetime.now(),
            )
            saved = await self.thread_repository.save(thread)
            logfire.info(
                "Thread created", thread_id=str(saved.id), author=author.handle.root
            )
            return saved

    async def get_thread_by_id(self, thread_id: ThreadId) -> Thread | None:
        """Get a thread by ID.

        Args:
            thread_id: Thread ID

        Returns:
            Thread if found, None otherwise
        """
        with logfire.span("thread_service.get_thread_by_id", thread_id=str(thread_id)):
            thread = await self.thread_repository.find_by_id(thread_id)
            if not thread:
                logfire.warn("Thread not found", thread_id=str(thread_id))
            return thread
