"""Feed use cases."""

from .list_feed import FeedListItem, ListFeedRequest, ListFeedResponse, ListFeedUseCase

__all__ = [
    "FeedListItem",
    "ListFeedRequest",
    "ListFeedResponse",
    "ListFeedUseCase",
]
