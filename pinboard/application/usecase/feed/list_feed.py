"""List feed use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from pinboard.domain.service import FeedService
from pinboard.domain.value import FeedScope, FeedSort, UserId


class FeedListItem(BaseModel):
    """Thread in a feed with live aggregates."""

    thread_id: str
    board_slug: str
    title: str
    body: str
    author_id: str
    author_handle: str
    created_at: datetime
    score: int
    upvotes: int
    downvotes: int
    viewer_vote: int
    response_count: int
    latest_activity_at: datetime


class ListFeedRequest(BaseModel):
    """List feed request."""

    scope: FeedScope = FeedScope.GLOBAL
    sort: FeedSort = FeedSort.NEW
    search: str | None = None
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListFeedResponse(BaseModel):
    """List feed response."""

    items: list[FeedListItem]
    total: int
    limit: int
    offset: int


class ListFeedUseCase:
    """Use case for listing a ranked thread feed."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize list feed use case.

        Args:
            feed_service: Feed ranking service
        """
        self.feed_service = feed_service

    async def execute(self, request: ListFeedRequest) -> ListFeedResponse:
        """Execute list feed flow.

        Args:
            request: Feed filters, ordering and pagination

        Returns:
            Ranked page of threads
        """
        viewer_id = UserId(UUID(request.user_id)) if request.user_id else None

        page = await self.feed_service.list_feed(
            scope=request.scope,
            sort=request.sort,
            search=request.search,
            viewer_id=viewer_id,
            limit=request.limit,
            offset=request.offset,
        )

        items = [
            FeedListItem(
                thread_id=str(item.thread.id),
                board_slug=item.thread.board_slug,
                title=item.thread.title,
                body=item.thread.body,
                author_id=str(item.thread.author_id),
                author_handle=item.thread.author_handle.root,
                created_at=item.thread.created_at,
                score=item.score,
                upvotes=item.tally.upvotes,
                downvotes=item.tally.downvotes,
                viewer_vote=item.tally.viewer_vote,
                response_count=item.response_count,
                latest_activity_at=item.latest_activity_at,
            )
            for item in page.items
        ]

        logfire.info("Feed items listed", count=len(items), total=page.total)

        return ListFeedResponse(
            items=items, total=page.total, limit=page.limit, offset=page.offset
        )
