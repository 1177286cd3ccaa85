"""Unit tests for PinboardClient."""

import asyncio
import json

import httpx
import pytest

from pinboard.client import (
    BadgeBus,
    BadgeCounter,
    BadgeTopic,
    ClientError,
    PinboardClient,
    chat_unread_poller,
    notification_unread_poller,
    open_chat,
)
from pinboard.config import ClientSettings


def _client(handler, auth_token="token-123") -> PinboardClient:
    return PinboardClient(
        ClientSettings(base_url="http://pinboard.test"),
        auth_token=auth_token,
        transport=httpx.MockTransport(handler),
    )


class TestPinboardClient:
    """Tests for the HTTP client."""

    @pytest.mark.asyncio
    async def test_sends_auth_cookie_and_parses_counts(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["cookie"] = request.headers.get("cookie")
            return httpx.Response(200, json={"unread_count": 4, "unread_messages": 2})

        async with _client(handler) as client:
            counts = await client.unread_counts()

        assert seen["path"] == "/notifications/unread-count"
        assert seen["cookie"] == "auth_token=token-123"
        assert counts.unread_count == 4
        assert counts.unread_messages == 2

    @pytest.mark.asyncio
    async def test_error_status_raises_client_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"detail": "Authentication required"})

        async with _client(handler) as client:
            with pytest.raises(ClientError) as exc_info:
                await client.list_chats()

        assert exc_info.value.status_code == 401
        assert "Authentication required" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_raises_client_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ClientError) as exc_info:
                await client.mark_all_notifications_read()

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_non_json_body_raises_client_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>Bad gateway</html>")

        async with _client(handler) as client:
            with pytest.raises(ClientError) as exc_info:
                await client.unread_counts()

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises_client_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"count": "many"})

        async with _client(handler) as client:
            with pytest.raises(ClientError):
                await client.unread_counts()

    @pytest.mark.asyncio
    async def test_send_message_posts_json(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                201,
                json={
                    "message_id": "6f1c2a3e-0000-4000-8000-000000000001",
                    "sender_id": "6f1c2a3e-0000-4000-8000-000000000002",
                    "recipient_id": "6f1c2a3e-0000-4000-8000-000000000003",
                    "body": "hi",
                    "shared_thread_id": None,
                    "created_at": "2025-01-01T12:00:00",
                    "read_at": None,
                },
            )

        async with _client(handler) as client:
            message = await client.send_message(
                "6f1c2a3e-0000-4000-8000-000000000003", body="hi"
            )

        assert captured["method"] == "POST"
        assert captured["body"] == {"body": "hi", "shared_thread_id": None}
        assert message.body == "hi"

    @pytest.mark.asyncio
    async def test_chat_poller_sums_unread_counts(self):
        def handler(request: httpx.Request) -> httpx.Response:
            chat = {
                "handle": "alice",
                "name": "Alice",
                "last_message": "hi",
                "last_message_at": "2025-01-01T12:00:00",
            }
            return httpx.Response(
                200,
                json={
                    "chats": [
                        {**chat, "user_id": "u1", "unread_count": 2},
                        {**chat, "user_id": "u2", "unread_count": 3},
                    ],
                    "total_unread": 5,
                },
            )

        bus = BadgeBus()
        seen = []
        bus.subscribe(BadgeTopic.CHAT_UNREAD, lambda e: seen.append(e.total))
        async with _client(handler) as client:
            poller = chat_unread_poller(client, bus, client.settings)
            await poller.poll_once()

        assert seen == [5]


class TestBadgeSyncOverHttp:
    """Badge sync driven by real client responses."""

    @pytest.mark.asyncio
    async def test_poller_recovers_after_malformed_response(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            if len(calls) == 1:
                return httpx.Response(200, text="<html>maintenance</html>")
            return httpx.Response(200, json={"unread_count": 4, "unread_messages": 0})

        bus = BadgeBus()
        counter = BadgeCounter(bus, BadgeTopic.NOTIFICATION_UNREAD)
        counter.mount()
        settings = ClientSettings(
            base_url="http://pinboard.test", notification_poll_interval=0.01
        )
        async with PinboardClient(
            settings, auth_token="token-123", transport=httpx.MockTransport(handler)
        ) as client:
            poller = notification_unread_poller(client, bus, settings)
            poller.mount()
            for _ in range(100):
                if counter.total == 4:
                    break
                await asyncio.sleep(0.01)
            await poller.unmount()

        assert len(calls) > 1
        assert counter.total == 4
        assert not poller.mounted

    @pytest.mark.asyncio
    async def test_open_chat_drops_sibling_badge_before_next_poll(self):
        conversation = {
            "user_id": "u1",
            "handle": "alice",
            "name": "Alice",
            "messages": [],
            "marked_read": 2,
        }
        chats = {
            "chats": [
                {
                    "user_id": "u1",
                    "handle": "alice",
                    "name": "Alice",
                    "last_message": "hi",
                    "last_message_at": "2025-01-01T12:00:00",
                    "unread_count": 2,
                },
                {
                    "user_id": "u2",
                    "handle": "bob",
                    "name": "Bob",
                    "last_message": "yo",
                    "last_message_at": "2025-01-01T11:00:00",
                    "unread_count": 1,
                },
            ],
            "total_unread": 3,
        }
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request.url.path)
            if request.url.path == "/chats":
                return httpx.Response(200, json=chats)
            return httpx.Response(200, json=conversation)

        bus = BadgeBus()
        nav_badge = BadgeCounter(bus, BadgeTopic.CHAT_UNREAD)
        nav_badge.mount()
        async with _client(handler) as client:
            poller = chat_unread_poller(client, bus, client.settings)
            await poller.poll_once()
            assert nav_badge.total == 3

            opened = await open_chat(client, poller, "u1")

        assert opened.marked_read == 2
        assert nav_badge.total == 1
        assert requests == ["/chats", "/chats/u1"]

    @pytest.mark.asyncio
    async def test_open_chat_refreshes_when_total_unknown(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/chats":
                return httpx.Response(200, json={"chats": [], "total_unread": 0})
            return httpx.Response(
                200,
                json={
                    "user_id": "u1",
                    "handle": "alice",
                    "name": "Alice",
                    "messages": [],
                    "marked_read": 1,
                },
            )

        bus = BadgeBus()
        seen = []
        bus.subscribe(BadgeTopic.CHAT_UNREAD, lambda e: seen.append(e.total))
        async with _client(handler) as client:
            poller = chat_unread_poller(client, bus, client.settings)
            await open_chat(client, poller, "u1")

        assert seen == [0]
