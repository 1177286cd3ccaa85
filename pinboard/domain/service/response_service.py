"""Response domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from pinboard.domain.error import ValidationError
from pinboard.domain.model import Response, Thread, User
from pinboard.domain.repository import ResponseRepository
from pinboard.domain.value import ResponseId

from .base import Service


class ResponseService(Service):
    """Domain service for responses posted under threads."""

    def __init__(self, response_repository: ResponseRepository) -> None:
        self.response_repository = response_repository

    async def create_response(self, thread: Thread, author: User, body: str) -> Response:
        """Create a response on a thread.

        Args:
            thread: Thread being replied to
            author: Authoring user
            body: Response text

        Returns:
            Created response
        """
        body = body.strip()
        if not body:
            raise ValidationError("Response body is required")

        with logfire.span(
            "response_service.create_response",
            thread_id=str(thread.id),
            author_id=str(author.id),
        ):
            response = Response(
                id=ResponseId(uuid4()),
                thread_id=thread.id,
                author_id=author.id,
                author_handle=author.handle,
                body=body,
                created_at=datetime.now(),
            )
            saved = await self.response_repository.save(response)
            logfire.info(
                "Response created",
                response_id=str(saved.id),
                thread_id=str(thread.id),
                author=author.handle.root,
            )
            return saved
