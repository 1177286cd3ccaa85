"""Domain model entities for Pinboard."""

from pinboard.domain.model.direct_message import DirectMessage
from pinboard.domain.model.follow import Follow
from pinboard.domain.model.notification import Notification
from pinboard.domain.model.response import Response
from pinboard.domain.model.thread import Thread
from pinboard.domain.model.user import User
from pinboard.domain.model.vote import Vote

__all__ = [
    "User",
    "Thread",
    "Response",
    "Vote",
    "Notification",
    "DirectMessage",
    "Follow",
]
