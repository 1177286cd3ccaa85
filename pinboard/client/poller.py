"""Background polling of unread badge totals.

Each UI region that shows an unread badge owns one ``UnreadPoller``. The
poller refreshes the total on an interval and broadcasts every change on
the ``BadgeBus`` so other regions (e.g. the navigation bar) stay in sync
without polling themselves. Regions that only display a badge mount a
``BadgeCounter`` instead.
"""

import asyncio
from typing import Awaitable, Callable

import logfire

from pinboard.application.usecase.chat import OpenConversationResponse
from pinboard.config import ClientSettings

from .api import PinboardClient
from .bus import BadgeBus, BadgeTopic, Subscription, UnreadChanged
from .error import ClientError

Fetch = Callable[[], Awaitable[int]]


class UnreadPoller:
    """Polls one unread total and publishes changes.

    ``mount`` starts the background task and ``unmount`` cancels it. Every
    mount and unmount bumps a generation counter; a poll that completes
    after its generation has moved on is discarded, so a stopped region
    never publishes a stale total.
    """

    def __init__(
        self,
        topic: BadgeTopic,
        fetch: Fetch,
        bus: BadgeBus,
        interval: float,
    ) -> None:
        self.topic = topic
        self.fetch = fetch
        self.bus = bus
        self.interval = interval
        self.total: int | None = None
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def mounted(self) -> bool:
        return self._task is not None

    def mount(self) -> None:
        """Start polling. Must be called from a running event loop."""
        if self._task is not None:
            return
        self._generation += 1
        self._task = asyncio.create_task(self._run(self._generation))
        logfire.debug("Badge poller mounted", topic=self.topic.value)

    async def unmount(self) -> None:
        """Stop polling and wait for the task to finish."""
        self._generation += 1
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logfire.debug("Badge poller unmounted", topic=self.topic.value)

    async def poll_once(self) -> int | None:
        """Fetch the total once and publish it if it changed.

        Returns:
            The fetched total, or None if the result was discarded
        """
        generation = self._generation
        total = await self.fetch()
        if generation != self._generation:
            logfire.debug("Discarding stale badge total", topic=self.topic.value)
            return None
        self.apply(total)
        return total

    def apply(self, total: int) -> None:
        """Record a freshly observed total and broadcast it if it changed.

        Also used when an action response (e.g. mark-all-read) carries the
        new total, so the badge updates before the next poll.
        """
        if total == self.total:
            return
        self.total = total
        self.bus.publish(UnreadChanged(topic=self.topic, total=total))

    async def _run(self, generation: int) -> None:
        while generation == self._generation:
            try:
                await self.poll_once()
            except ClientError as e:
                logfire.warn(
                    "Badge poll failed", topic=self.topic.value, error=str(e)
                )
            except Exception:
                logfire.exception("Badge poll crashed", topic=self.topic.value)
            await asyncio.sleep(self.interval)


class BadgeCounter:
    """Display-only region that mirrors a badge total from the bus."""

    def __init__(self, bus: BadgeBus, topic: BadgeTopic, total: int = 0) -> None:
        self.bus = bus
        self.topic = topic
        self.total = total
        self._subscription: Subscription | None = None

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    def mount(self) -> None:
        if self._subscription is None:
            self._subscription = self.bus.subscribe(self.topic, self._on_change)

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_change(self, event: UnreadChanged) -> None:
        self.total = event.total


def chat_unread_poller(
    client: PinboardClient, bus: BadgeBus, settings: ClientSettings
) -> UnreadPoller:
    """Poller for the chat list region.

    The chat badge is the sum of per-conversation unread counts. Anonymous
    clients always report zero.
    """

    async def fetch() -> int:
        if not client.authenticated:
            return 0
        chats = await client.list_chats()
        return sum(chat.unread_count for chat in chats.chats)

    return UnreadPoller(BadgeTopic.CHAT_UNREAD, fetch, bus, settings.chat_poll_interval)


def notification_unread_poller(
    client: PinboardClient, bus: BadgeBus, settings: ClientSettings
) -> UnreadPoller:
    """Poller for the notifications region."""

    async def fetch() -> int:
        if not client.authenticated:
            return 0
        counts = await client.unread_counts()
        return counts.unread_count

    return UnreadPoller(
        BadgeTopic.NOTIFICATION_UNREAD,
        fetch,
        bus,
        settings.notification_poll_interval,
    )


async def open_chat(
    client: PinboardClient, chat_poller: UnreadPoller, user_id: str
) -> OpenConversationResponse:
    """Open a conversation and drop the chat badge right away.

    Opening marks the partner's messages read on the server. The chat
    badge is reduced by that count immediately so sibling regions update
    before the next poll; if no total has been observed yet the poller
    refreshes instead.
    """
    conversation = await client.open_conversation(user_id)
    if conversation.marked_read:
        if chat_poller.total is None:
            await chat_poller.poll_once()
        else:
            chat_poller.apply(max(chat_poller.total - conversation.marked_read, 0))
    return conversation
