"""Strongly typed identifiers for Pinboard domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ThreadId = NewType("ThreadId", UUID)
ResponseId = NewType("ResponseId", UUID)
VoteId = NewType("VoteId", UUID)
NotificationId = NewType("NotificationId", UUID)
DirectMessageId = NewType("DirectMessageId", UUID)
FollowId = NewType("FollowId", UUID)
