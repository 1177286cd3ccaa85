"""Thread and response routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from pinboard.application.usecase.response import (
    CreateResponseRequest,
    CreateResponseResponse,
    CreateResponseUseCase,
)
from pinboard.application.usecase.thread import (
    CreateThreadRequest,
    CreateThreadResponse,
    CreateThreadUseCase,
)
from pinboard.domain.error import DomainError
from pinboard.domain.service import JWTService
from pinboard.interface.api.auth import require_user_id
from pinboard.interface.error import invalid_id, to_http_exception

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)


class CreateThreadAPIRequest(BaseModel):
    """API request for creating a thread."""

    title: str = Field(min_length=1, max_length=300)
    body: str = Field(min_length=1, max_length=10000)
    board_slug: str = Field(default="general", min_length=1, max_length=50)


class CreateResponseAPIRequest(BaseModel):
    """API request for replying to a thread."""

    body: str = Field(min_length=1, max_length=10000)


@router.post(
    "",
    response_model=CreateThreadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_thread(
    request: CreateThreadAPIRequest,
    create_thread_use_case: FromDishka[CreateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateThreadResponse:
    """Create a thread and notify anyone @-mentioned in it.

    Requires authentication.
    """
    user_id = require_user_id(jwt_service, auth_token, "create threads")

    try:
        return await create_thread_use_case.execute(
            CreateThreadRequest(
                author_id=user_id,
                title=request.title,
                body=request.body,
                board_slug=request.board_slug,
            )
        )
    except DomainError as e:
        logfire.warn("Thread creation failed", error=str(e))
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e


@router.post(
    "/{thread_id}/responses",
    response_model=CreateResponseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_response(
    thread_id: str,
    request: CreateResponseAPIRequest,
    create_response_use_case: FromDishka[CreateResponseUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateResponseResponse:
    """Reply to a thread.

    Notifies the thread author and anyone @-mentioned in the reply.
    Requires authentication.
    """
    user_id = require_user_id(jwt_service, auth_token, "respond")

    try:
        return await create_response_use_case.execute(
            CreateResponseRequest(
                thread_id=thread_id, author_id=user_id, body=request.body
            )
        )
    except DomainError as e:
        logfire.warn("Response creation failed", error=str(e))
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e
