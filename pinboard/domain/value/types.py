"""Domain value objects for Pinboard.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum, IntEnum
from uuid import UUID

from pydantic import field_validator

from pinboard.domain.value.common import RootValueObject, ValueObject


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    THREAD = "thread"
    RESPONSE = "response"


class VoteValue(IntEnum):
    """Direction of a vote."""

    UP = 1
    DOWN = -1


class NotificationType(str, Enum):
    """Kind of event a notification reports."""

    REPLY = "reply"
    MENTION = "mention"
    FOLLOW = "follow"
    DIRECT_MESSAGE = "direct_message"


class NotificationEntityType(str, Enum):
    """Type of entity a notification points at."""

    THREAD = "thread"
    RESPONSE = "response"
    USER = "user"
    MESSAGE = "message"


class FeedSort(str, Enum):
    """Feed orderings."""

    NEW = "new"  # created_at DESC
    TOP = "top"  # score DESC, then created_at DESC
    ACTIVE = "active"  # latest activity DESC
    DISCUSSED = "discussed"  # response count DESC, then created_at DESC


class FeedScope(str, Enum):
    """Which threads a feed draws from."""

    GLOBAL = "global"
    FOLLOWING = "following"


HANDLE_PATTERN = re.compile(r"^[a-z0-9_]{1,20}$")


class Handle(RootValueObject[str]):
    """Unique user handle used for @-mentions.

    Normalized to lowercase with any leading ``@`` removed. Length rules
    for registration live with the identity service; here a handle only has
    to be well formed.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_handle(cls, v: str) -> str:
        """Lowercase and strip leading @ characters."""
        if isinstance(v, str):
            return v.strip().lower().lstrip("@")
        return v

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle characters and length."""
        if not HANDLE_PATTERN.match(v):
            raise ValueError(
                "Handle must be 1-20 characters of lowercase letters, digits or underscore"
            )
        return v


class Votable(ValueObject):
    """Polymorphic reference to a thread or response that can be voted on."""

    id: UUID
    type: VotableType


class VoteTally(ValueObject):
    """Live vote aggregate for one votable entity, from one viewer's side."""

    upvotes: int = 0
    downvotes: int = 0
    viewer_vote: int = 0  # -1, 0 (not voted / anonymous) or 1

    @property
    def score(self) -> int:
        """Net score."""
        return self.upvotes - self.downvotes


class Mention(ValueObject):
    """An @handle found in text and the user it resolved to. Never stored."""

    handle: str
    user_id: UUID
