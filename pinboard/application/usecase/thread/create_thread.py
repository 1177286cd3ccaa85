"""Create thread use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from pinboard.application.usecase.base import BaseUseCase
from pinboard.domain.service import NotificationService, ThreadService, UserService
from pinboard.domain.value import UserId


class CreateThreadRequest(BaseModel):
    """Create thread request."""

    author_id: str  # User ID from authenticated user
    title: str = Field(min_length=1, max_length=300)
    body: str = Field(min_length=1, max_length=10000)
    board_slug: str = "general"


class CreateThreadResponse(BaseModel):
    """Create thread response."""

    thread_id: str
    board_slug: str
    author_id: str
    author_handle: str
    title: str
    body: str
    created_at: datetime
    notified_count: int


class CreateThreadUseCase(BaseUseCase):
    """Use case for posting a thread and notifying mentioned users."""

    def __init__(
        self,
        thread_service: ThreadService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize create thread use case.

        Args:
            thread_service: Thread domain service
            user_service: User domain service
            notification_service: Notification fan-out service
        """
        self.thread_service = thread_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def execute(self, request: CreateThreadRequest) -> CreateThreadResponse:
        """Execute create thread flow.

        Steps:
        1. Load the author
        2. Save the thread
        3. Fan out mention notifications (failures never fail the write)

        Args:
            request: Create thread request

        Returns:
            Created thread

        Raises:
            EntityNotFoundError: If the author does not exist
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        thread = await self.thread_service.create_thread(
            author=author,
            title=request.title,
            body=request.body,
            board_slug=request.board_slug,
        )

        notifications = await self.notification_service.notify_thread_mentions(
            thread, author
        )

        return CreateThreadResponse(
            thread_id=str(thread.id),
            board_slug=thread.board_slug,
            author_id=str(thread.author_id),
            author_handle=thread.author_handle.root,
            title=thread.title,
            body=thread.body,
            created_at=thread.created_at,
            notified_count=len(notifications),
        )
