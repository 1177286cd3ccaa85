"""Unit tests for badge pollers."""

import asyncio

import pytest

from pinboard.client import (
    BadgeBus,
    BadgeCounter,
    BadgeTopic,
    ClientError,
    PinboardClient,
    UnreadPoller,
    chat_unread_poller,
    notification_unread_poller,
)
from pinboard.config import ClientSettings


class FakeFetch:
    """Returns queued totals; raises queued exceptions."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self) -> int:
        self.calls += 1
        result = self.results.pop(0) if self.results else 0
        if isinstance(result, Exception):
            raise result
        return result


class TestUnreadPoller:
    """Tests for UnreadPoller."""

    @pytest.mark.asyncio
    async def test_poll_publishes_only_changes(self):
        bus = BadgeBus()
        counter = BadgeCounter(bus, BadgeTopic.CHAT_UNREAD)
        counter.mount()
        seen = []
        bus.subscribe(BadgeTopic.CHAT_UNREAD, lambda e: seen.append(e.total))
        poller = UnreadPoller(BadgeTopic.CHAT_UNREAD, FakeFetch(2, 2, 5), bus, interval=60)

        await poller.poll_once()
        await poller.poll_once()
        await poller.poll_once()

        assert seen == [2, 5]
        assert counter.total == 5

    @pytest.mark.asyncio
    async def test_stale_result_is_discarded(self):
        bus = BadgeBus()
        seen = []
        bus.subscribe(BadgeTopic.NOTIFICATION_UNREAD, lambda e: seen.append(e.total))
        release = asyncio.Event()

        async def slow_fetch() -> int:
            await release.wait()
            return 7

        poller = UnreadPoller(BadgeTopic.NOTIFICATION_UNREAD, slow_fetch, bus, interval=60)
        in_flight = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)

        # Region stops while the request is in flight
        await poller.unmount()
        release.set()

        assert await in_flight is None
        assert seen == []
        assert poller.total is None

    @pytest.mark.asyncio
    async def test_mount_polls_until_unmounted(self):
        bus = BadgeBus()
        seen = []
        bus.subscribe(BadgeTopic.CHAT_UNREAD, lambda e: seen.append(e.total))
        fetch = FakeFetch(1, 2, 3, 4, 5, 6)
        poller = UnreadPoller(BadgeTopic.CHAT_UNREAD, fetch, bus, interval=0.01)

        poller.mount()
        assert poller.mounted
        while len(seen) < 3:
            await asyncio.sleep(0.01)
        await poller.unmount()
        calls_after_stop = fetch.calls
        await asyncio.sleep(0.05)

        assert not poller.mounted
        assert seen[:3] == [1, 2, 3]
        assert fetch.calls == calls_after_stop

    @pytest.mark.asyncio
    async def test_poll_errors_do_not_stop_loop(self):
        bus = BadgeBus()
        seen = []
        bus.subscribe(BadgeTopic.CHAT_UNREAD, lambda e: seen.append(e.total))
        fetch = FakeFetch(ClientError("offline"), 4)
        poller = UnreadPoller(BadgeTopic.CHAT_UNREAD, fetch, bus, interval=0.01)

        poller.mount()
        while not seen:
            await asyncio.sleep(0.01)
        await poller.unmount()

        assert seen[0] == 4

    @pytest.mark.asyncio
    async def test_unexpected_errors_do_not_stop_loop(self):
        bus = BadgeBus()
        seen = []
        bus.subscribe(BadgeTopic.CHAT_UNREAD, lambda e: seen.append(e.total))
        fetch = FakeFetch(RuntimeError("boom"), KeyError("chats"), 6)
        poller = UnreadPoller(BadgeTopic.CHAT_UNREAD, fetch, bus, interval=0.01)

        poller.mount()
        while not seen:
            await asyncio.sleep(0.01)
        await poller.unmount()

        assert seen[0] == 6
        assert fetch.calls >= 3

    @pytest.mark.asyncio
    async def test_apply_from_action_response(self):
        bus = BadgeBus()
        counter = BadgeCounter(bus, BadgeTopic.NOTIFICATION_UNREAD, total=3)
        counter.mount()
        poller = UnreadPoller(BadgeTopic.NOTIFICATION_UNREAD, FakeFetch(), bus, interval=60)

        poller.apply(0)

        assert counter.total == 0


class TestBadgeCounter:
    """Tests for display-only badge regions."""

    def test_unmounted_counter_ignores_events(self):
        bus = BadgeBus()
        counter = BadgeCounter(bus, BadgeTopic.CHAT_UNREAD)
        counter.mount()
        counter.unmount()

        poller = UnreadPoller(BadgeTopic.CHAT_UNREAD, FakeFetch(), bus, interval=60)
        poller.apply(9)

        assert counter.total == 0
        assert bus.subscriber_count(BadgeTopic.CHAT_UNREAD) == 0


class TestPollerFactories:
    """Tests for the chat and notification poller factories."""

    @pytest.mark.asyncio
    async def test_anonymous_client_reports_zero(self):
        bus = BadgeBus()
        settings = ClientSettings()
        async with PinboardClient(settings) as client:
            chat = chat_unread_poller(client, bus, settings)
            notifications = notification_unread_poller(client, bus, settings)

            assert await chat.poll_once() == 0
            assert await notifications.poll_once() == 0

        assert chat.interval == 8.0
        assert notifications.interval == 9.0
