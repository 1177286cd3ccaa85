"""Domain services."""

from .base import Service
from .feed_service import FeedItem, FeedPage, FeedService, rank_threads
from .follow_service import FollowResult, FollowService
from .jwt_service import JWTService
from .mention_service import MentionService
from .message_service import ChatSummary, Conversation, MessageService
from .notification_service import FEED_EXCLUDED_TYPES, NotificationService
from .response_service import ResponseService
from .thread_service import ThreadService
from .unread_service import UnreadService
from .user_service import UserService
from .vote_service import VoteService, parse_vote_value

__all__ = [
    "ChatSummary",
    "Conversation",
    "FEED_EXCLUDED_TYPES",
    "FeedItem",
    "FeedPage",
    "FeedService",
    "FollowResult",
    "FollowService",
    "JWTService",
    "MentionService",
    "MessageService",
    "NotificationService",
    "ResponseService",
    "Service",
    "ThreadService",
    "UnreadService",
    "UserService",
    "VoteService",
    "parse_vote_value",
    "rank_threads",
]
