"""Feed ranking domain service."""

from datetime import datetime
from typing import Iterable

import logfire

from pinboard.config import FeedSettings
from pinboard.domain.model import Thread
from pinboard.domain.repository import (
    FollowRepository,
    ResponseRepository,
    ThreadActivity,
    ThreadRepository,
)
from pinboard.domain.value import FeedScope, FeedSort, UserId, VotableType, VoteTally
from pinboard.domain.value.common import ValueObject

from .base import Service
from .vote_service import VoteService


class FeedItem(ValueObject):
    """A thread with the aggregates a feed needs to rank and render it."""

    thread: Thread
    tally: VoteTally = VoteTally()
    response_count: int = 0
    latest_activity_at: datetime

    @property
    def score(self) -> int:
        return self.tally.score


class FeedPage(ValueObject):
    """One page of a ranked feed."""

    items: list[FeedItem]
    total: int
    limit: int
    offset: int


def latest_activity(thread: Thread, activity: ThreadActivity) -> datetime:
    """Latest of the thread's own creation and its newest response."""
    if activity.latest_response_at and activity.latest_response_at > thread.created_at:
        return activity.latest_response_at
    return thread.created_at


def rank_threads(items: Iterable[FeedItem], sort: FeedSort = FeedSort.NEW) -> list[FeedItem]:
    """Order feed items.

    Pure function; relies on sort stability so ties on the primary key keep
    newest-first order.

    Args:
        items: Feed items to order
        sort: Ordering to apply

    Returns:
        New list in ranked order
    """
    ranked = sorted(items, key=lambda item: item.thread.created_at, reverse=True)

    if sort == FeedSort.TOP:
        ranked.sort(key=lambda item: item.score, reverse=True)
    elif sort == FeedSort.ACTIVE:
        ranked.sort(key=lambda item: item.latest_activity_at, reverse=True)
    elif sort == FeedSort.DISCUSSED:
        ranked.sort(key=lambda item: item.response_count, reverse=True)

    return ranked


class FeedService(Service):
    """Builds ranked thread feeds with live aggregates."""

    def __init__(
        self,
        thread_repository: ThreadRepository,
        response_repository: ResponseRepository,
        follow_repository: FollowRepository,
        vote_service: VoteService,
        feed_settings: FeedSettings,
    ) -> None:
        """Initialize feed service.

        Args:
            thread_repository: Thread repository
            response_repository: Response repository
            follow_repository: Follow repository
            vote_service: Score aggregator
            feed_settings: Feed page size settings
        """
        self.thread_repository = thread_repository
        self.response_repository = response_repository
        self.follow_repository = follow_repository
        self.vote_service = vote_service
        self.settings = feed_settings

    async def list_feed(
        self,
        scope: FeedScope = FeedScope.GLOBAL,
        sort: FeedSort = FeedSort.NEW,
        search: str | None = None,
        viewer_id: UserId | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> FeedPage:
        """List a ranked page of threads.

        Args:
            scope: All threads, or only those by users the viewer follows
            sort: Ordering
            search: Case-insensitive substring on title or body
            viewer_id: Viewing user (None for anonymous)
            limit: Page size, clamped to the configured range
            offset: Items to skip after ranking

        Returns:
            Feed page
        """
        if limit is None:
            limit = self.settings.default_limit
        limit = max(1, min(limit, self.settings.max_limit))
        offset = max(0, offset)
        search = (search or "").strip() or None

        with logfire.span(
            "feed_service.list_feed",
            scope=scope.value,
            sort=sort.value,
            search=search,
            limit=limit,
            offset=offset,
        ):
            author_ids = None
            if scope == FeedScope.FOLLOWING:
                if viewer_id is None:
                    return FeedPage(items=[], total=0, limit=limit, offset=offset)
                author_ids = await self.follow_repository.find_following_ids(viewer_id)
                if not author_ids:
                    return FeedPage(items=[], total=0, limit=limit, offset=offset)

            threads = await self.thread_repository.find_all(
                search=search, author_ids=author_ids
            )
            thread_ids = [thread.id for thread in threads]

            tallies = await self.vote_service.get_tallies(
                VotableType.THREAD, thread_ids, viewer_id
            )
            activity = await self.response_repository.activity_for_threads(thread_ids)

            items = []
            for thread in threads:
                stats = activity.get(thread.id, ThreadActivity())
                items.append(
                    FeedItem(
                        thread=thread,
                        tally=tallies.get(thread.id, VoteTally()),
                        response_count=stats.response_count,
                        latest_activity_at=latest_activity(thread, stats),
                    )
                )

            ranked = rank_threads(items, sort)
            page = ranked[offset : offset + limit]

            logfire.info("Feed listed", count=len(page), total=len(ranked))
            return FeedPage(items=page, total=len(ranked), limit=limit, offset=offset)
