"""Notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from pinboard.application.usecase.notification import (
    GetUnreadCountRequest,
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadResponse,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
    UnreadCountResponse,
)
from pinboard.domain.error import DomainError
from pinboard.domain.service import JWTService
from pinboard.interface.api.auth import require_user_id
from pinboard.interface.error import invalid_id, to_http_exception

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int | None = Query(default=None),
    unread: str | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the caller's notifications, newest first.

    Direct message notifications are not included; they surface through
    the chat unread count.

    Args:
        limit: Maximum results; out-of-range values are clamped to 1-100
        unread: ``1`` or ``true`` to list unread notifications only
    """
    user_id = require_user_id(jwt_service, auth_token, "view notifications")

    try:
        return await list_notifications_use_case.execute(
            ListNotificationsRequest(
                user_id=user_id,
                unread_only=(unread or "").lower() in ("1", "true"),
                limit=limit,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UnreadCountResponse:
    """Unread notification and direct message totals for the badges."""
    user_id = require_user_id(jwt_service, auth_token, "view notifications")
    return await get_unread_count_use_case.execute(
        GetUnreadCountRequest(user_id=user_id)
    )


@router.post("/read-all", response_model=MarkAllNotificationsReadResponse)
async def mark_all_read(
    mark_all_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllNotificationsReadResponse:
    """Mark every notification read."""
    user_id = require_user_id(jwt_service, auth_token, "update notifications")

    try:
        return await mark_all_use_case.execute(
            MarkAllNotificationsReadRequest(user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/{notification_id}/read", response_model=MarkNotificationReadResponse)
async def mark_read(
    notification_id: str,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationReadResponse:
    """Mark one notification read.

    Returns ``marked_read: false`` when the notification was already read
    or does not belong to the caller.
    """
    user_id = require_user_id(jwt_service, auth_token, "update notifications")

    try:
        return await mark_read_use_case.execute(
            MarkNotificationReadRequest(
                notification_id=notification_id, user_id=user_id
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise invalid_id(e) from e
