"""Vote routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from pinboard.application.usecase.vote import (
    GetScoreRequest,
    GetScoreUseCase,
    SubmitVoteRequest,
    SubmitVoteUseCase,
    VoteTallyResponse,
)
from pinboard.domain.error import DomainError
from pinboard.domain.service import JWTService
from pinboard.domain.value import VotableType
from pinboard.interface.api.auth import require_user_id
from pinboard.interface.error import invalid_id, to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    value: Any  # 1 or -1; anything else is rejected with 400


async def _submit(
    votable_type: VotableType,
    votable_id: str,
    value: Any,
    use_case: SubmitVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteTallyResponse:
    user_id = require_user_id(jwt_service, auth_token, "vote")
    try:
        return await use_case.execute(
            SubmitVoteRequest(
                votable_type=votable_type,
                votable_id=votable_id,
                user_id=user_id,
                value=value,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e


async def _score(
    votable_type: VotableType,
    votable_id: str,
    use_case: GetScoreUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteTallyResponse:
    try:
        return await use_case.execute(
            GetScoreRequest(
                votable_type=votable_type,
                votable_id=votable_id,
                user_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e


@router.post("/threads/{thread_id}/vote", response_model=VoteTallyResponse)
async def vote_thread(
    thread_id: str,
    request: VoteAPIRequest,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteTallyResponse:
    """Vote a thread up (1) or down (-1).

    Voting again with the same value changes nothing; the opposite value
    replaces the earlier vote. Requires authentication.
    """
    return await _submit(
        VotableType.THREAD,
        thread_id,
        request.value,
        submit_vote_use_case,
        jwt_service,
        auth_token,
    )


@router.post("/responses/{response_id}/vote", response_model=VoteTallyResponse)
async def vote_response(
    response_id: str,
    request: VoteAPIRequest,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteTallyResponse:
    """Vote a response up (1) or down (-1). Requires authentication."""
    return await _submit(
        VotableType.RESPONSE,
        response_id,
        request.value,
        submit_vote_use_case,
        jwt_service,
        auth_token,
    )


@router.get("/threads/{thread_id}/score", response_model=VoteTallyResponse)
async def thread_score(
    thread_id: str,
    get_score_use_case: FromDishka[GetScoreUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteTallyResponse:
    """Live score of a thread; viewer_vote is 0 for anonymous callers."""
    return await _score(
        VotableType.THREAD, thread_id, get_score_use_case, jwt_service, auth_token
    )


@router.get("/responses/{response_id}/score", response_model=VoteTallyResponse)
async def response_score(
    response_id: str,
    get_score_use_case: FromDishka[GetScoreUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteTallyResponse:
    """Live score of a response."""
    return await _score(
        VotableType.RESPONSE, response_id, get_score_use_case, jwt_service, auth_token
    )
