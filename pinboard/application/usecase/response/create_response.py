"""Create response use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from pinboard.application.usecase.base import BaseUseCase
from pinboard.domain.error import EntityNotFoundError
from pinboard.domain.service import (
    NotificationService,
    ResponseService,
    ThreadService,
    UserService,
)
from pinboard.domain.value import ThreadId, UserId


class CreateResponseRequest(BaseModel):
    """Create response request."""

    thread_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    body: str = Field(min_length=1, max_length=10000)


class CreateResponseResponse(BaseModel):
    """Create response response."""

    response_id: str
    thread_id: str
    author_id: str
    author_handle: str
    body: str
    created_at: datetime
    notified_count: int


class CreateResponseUseCase(BaseUseCase):
    """Use case for replying to a thread."""

    def __init__(
        self,
        thread_service: ThreadService,
        response_service: ResponseService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        self.thread_service = thread_service
        self.response_service = response_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def execute(self, request: CreateResponseRequest) -> CreateResponseResponse:
        """Execute create response flow.

        Steps:
        1. Verify thread exists
        2. Save the response
        3. Notify the thread author (REPLY) and anyone mentioned (MENTION)

        Raises:
            EntityNotFoundError: If the thread or author does not exist
        """
        thread_id = ThreadId(UUID(request.thread_id))

        thread = await self.thread_service.get_thread_by_id(thread_id)
        if not thread:
            raise EntityNotFoundError("Thread", request.thread_id)

        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        response = await self.response_service.create_response(
            thread=thread, author=author, body=request.body
        )

        notifications = await self.notification_service.notify_reply(
            thread, response, author
        )

        return CreateResponseResponse(
            response_id=str(response.id),
            thread_id=str(response.thread_id),
            author_id=str(response.author_id),
            author_handle=response.author_handle.root,
            body=response.body,
            created_at=response.created_at,
            notified_count=len(notifications),
        )
