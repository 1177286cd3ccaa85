"""HTTP client for the Pinboard API."""

from typing import Any, TypeVar

import httpx
import logfire
from pydantic import BaseModel

from pinboard.application.usecase.chat import (
    ListChatsResponse,
    MessageItem,
    OpenConversationResponse,
)
from pinboard.application.usecase.notification import (
    ListNotificationsResponse,
    MarkAllNotificationsReadResponse,
    MarkNotificationReadResponse,
    UnreadCountResponse,
)
from pinboard.application.usecase.vote import VoteTallyResponse
from pinboard.config import ClientSettings

from .error import ClientError

ModelT = TypeVar("ModelT", bound=BaseModel)


class PinboardClient:
    """Async API client authenticated by the ``auth_token`` cookie.

    Usage:
        async with PinboardClient(settings.client, auth_token=token) as client:
            counts = await client.unread_counts()
    """

    def __init__(
        self,
        settings: ClientSettings,
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            settings: Client settings (base URL, timeout)
            auth_token: Session token; None for an anonymous client
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.settings = settings
        self.auth_token = auth_token
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            cookies={"auth_token": auth_token} if auth_token else None,
            transport=transport,
        )

    @property
    def authenticated(self) -> bool:
        return self.auth_token is not None

    async def __aenter__(self) -> "PinboardClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self, method: str, path: str, model: type[ModelT], **kwargs: Any
    ) -> ModelT:
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = e.response.text
            try:
                detail = e.response.json().get("detail", detail)
            except (ValueError, AttributeError):
                pass
            logfire.warn(
                "API request rejected",
                method=method,
                path=path,
                status_code=e.response.status_code,
            )
            raise ClientError(str(detail), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logfire.warn("API request failed", method=method, path=path, error=str(e))
            raise ClientError(f"Request to {path} failed: {e}") from e

        try:
            return model.model_validate(response.json())
        except ValueError as e:
            # Non-JSON body or a payload that does not match the response model
            logfire.warn(
                "API response malformed", method=method, path=path, error=str(e)
            )
            raise ClientError(
                f"Malformed response from {path}", status_code=response.status_code
            ) from e

    async def unread_counts(self) -> UnreadCountResponse:
        """Fetch both unread badge totals."""
        return await self._request(
            "GET", "/notifications/unread-count", UnreadCountResponse
        )

    async def list_notifications(
        self, unread_only: bool = False, limit: int | None = None
    ) -> ListNotificationsResponse:
        params: dict[str, Any] = {}
        if unread_only:
            params["unread"] = "1"
        if limit is not None:
            params["limit"] = limit
        return await self._request(
            "GET", "/notifications", ListNotificationsResponse, params=params
        )

    async def mark_notification_read(
        self, notification_id: str
    ) -> MarkNotificationReadResponse:
        return await self._request(
            "POST",
            f"/notifications/{notification_id}/read",
            MarkNotificationReadResponse,
        )

    async def mark_all_notifications_read(self) -> MarkAllNotificationsReadResponse:
        return await self._request(
            "POST", "/notifications/read-all", MarkAllNotificationsReadResponse
        )

    async def list_chats(self, search: str | None = None) -> ListChatsResponse:
        params = {"search": search} if search else None
        return await self._request("GET", "/chats", ListChatsResponse, params=params)

    async def open_conversation(self, user_id: str) -> OpenConversationResponse:
        return await self._request(
            "GET", f"/chats/{user_id}", OpenConversationResponse
        )

    async def send_message(
        self,
        user_id: str,
        body: str | None = None,
        shared_thread_id: str | None = None,
    ) -> MessageItem:
        return await self._request(
            "POST",
            f"/chats/{user_id}",
            MessageItem,
            json={"body": body, "shared_thread_id": shared_thread_id},
        )

    async def vote(self, votable: str, votable_id: str, value: int) -> VoteTallyResponse:
        """Vote on a thread or response.

        Args:
            votable: ``threads`` or ``responses``
            votable_id: Item ID
            value: 1 or -1
        """
        return await self._request(
            "POST",
            f"/{votable}/{votable_id}/vote",
            VoteTallyResponse,
            json={"value": value},
        )
