"""Response entity - a reply posted under a thread."""

from datetime import datetime

from pydantic import Field

from pinboard.domain.model.common import DomainModel
from pinboard.domain.value import Handle, ResponseId, ThreadId, UserId


class Response(DomainModel):
    """Response to a thread."""

    id: ResponseId
    thread_id: ThreadId
    author_id: UserId
    author_handle: Handle
    body: str = Field(min_length=1, max_length=10000)
    created_at: datetime = Field(default_factory=datetime.now)
