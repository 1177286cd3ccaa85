"""Feed routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from pinboard.application.usecase.feed import (
    ListFeedRequest,
    ListFeedResponse,
    ListFeedUseCase,
)
from pinboard.domain.service import JWTService
from pinboard.domain.value import FeedScope, FeedSort

router = APIRouter(prefix="/feed", tags=["feed"], route_class=DishkaRoute)


@router.get("", response_model=ListFeedResponse)
async def list_feed(
    list_feed_use_case: FromDishka[ListFeedUseCase],
    jwt_service: FromDishka[JWTService],
    scope: FeedScope = Query(default=FeedScope.GLOBAL),
    sort: FeedSort = Query(default=FeedSort.NEW),
    search: str | None = Query(default=None, max_length=200),
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListFeedResponse:
    """List threads ranked by the chosen ordering.

    Anonymous callers get an empty ``following`` feed and ``viewer_vote`` 0.

    Args:
        scope: ``global`` or ``following``
        sort: ``new``, ``top``, ``active`` or ``discussed``
        search: Case-insensitive substring on title or body
        limit: Page size (1-100)
        offset: Items to skip after ranking
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    return await list_feed_use_case.execute(
        ListFeedRequest(
            scope=scope,
            sort=sort,
            search=search,
            limit=limit,
            offset=offset,
            user_id=user_id,
        )
    )
