"""Follow routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from pinboard.application.usecase.follow import (
    FollowStateResponse,
    FollowUserRequest,
    FollowUserUseCase,
    UnfollowUserRequest,
    UnfollowUserUseCase,
)
from pinboard.domain.error import DomainError
from pinboard.domain.service import JWTService
from pinboard.interface.api.auth import require_user_id
from pinboard.interface.error import invalid_id, to_http_exception

router = APIRouter(prefix="/users", tags=["follows"], route_class=DishkaRoute)


@router.post("/{user_id}/follow", response_model=FollowStateResponse)
async def follow_user(
    user_id: str,
    follow_user_use_case: FromDishka[FollowUserUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FollowStateResponse:
    """Follow a user. Following someone twice is a no-op."""
    follower_id = require_user_id(jwt_service, auth_token, "follow users")

    try:
        return await follow_user_use_case.execute(
            FollowUserRequest(follower_id=follower_id, following_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e


@router.delete("/{user_id}/follow", response_model=FollowStateResponse)
async def unfollow_user(
    user_id: str,
    unfollow_user_use_case: FromDishka[UnfollowUserUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FollowStateResponse:
    """Stop following a user."""
    follower_id = require_user_id(jwt_service, auth_token, "unfollow users")

    try:
        return await unfollow_user_use_case.execute(
            UnfollowUserRequest(follower_id=follower_id, following_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e
