"""Get unread count use case."""

from uuid import UUID

from pydantic import BaseModel

from pinboard.domain.service import UnreadService
from pinboard.domain.value import UserId


class GetUnreadCountRequest(BaseModel):
    """Get unread count request."""

    user_id: str


class UnreadCountResponse(BaseModel):
    """Unread badge totals."""

    unread_count: int
    unread_messages: int


class GetUnreadCountUseCase:
    """Use case for reading both unread badges."""

    def __init__(self, unread_service: UnreadService) -> None:
        self.unread_service = unread_service

    async def execute(self, request: GetUnreadCountRequest) -> UnreadCountResponse:
        user_id = UserId(UUID(request.user_id))
        return UnreadCountResponse(
            unread_count=await self.unread_service.unread_notification_count(user_id),
            unread_messages=await self.unread_service.unread_message_count(user_id),
        )
