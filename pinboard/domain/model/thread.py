"""Thread entity.

Threads are the top-level posts on a board. They can be voted on and
collect responses.
"""

from datetime import datetime

from pydantic import Field

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import Handle, ThreadId, UserId


class Thread(DomainModel):
    """Thread on a board."""

    id: ThreadId
    board_slug: str = Field(default="general", min_length=1, max_length=50)
    author_id: UserId
    author_handle: Handle
    title: str = Field(min_length=1, max_length=300)
    body: str = Field(min_length=1, max_length=10000)
    created_at: datetime = Field(default_factory=datetime.now)
