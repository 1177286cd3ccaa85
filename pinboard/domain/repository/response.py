"""Response repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from pinboard.domain.model.response import Response
from pinboard.domain.value import ResponseId, ThreadId
from pinboard.domain.value.common import ValueObject


class ThreadActivity(ValueObject):
    """Response statistics for a single thread."""

    response_count: int = 0
    latest_response_at: Optional[datetime] = None


class ResponseRepository(ABC):
    """Repository for Response entities."""

    @abstractmethod
    async def find_by_id(self, response_id: ResponseId) -> Optional[Response]:
        """Find a response by ID.

        Args:
            response_id: The response's unique identifier

        Returns:
            The response if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, response_id: ResponseId) -> bool:
        """Check whether a response exists."""
        pass

    @abstractmethod
    async def find_by_thread(self, thread_id: ThreadId) -> List[Response]:
        """Find all responses on a thread, oldest first."""
        pass

    @abstractmethod
    async def activity_for_threads(
        self, thread_ids: Sequence[ThreadId]
    ) -> Dict[ThreadId, ThreadActivity]:
        """Compute response count and latest response time per thread.

        Single grouped query to avoid N+1 lookups when building feeds.

        Args:
            thread_ids: Threads to compute activity for

        Returns:
            Mapping of thread ID to activity; threads without responses
            may be omitted
        """
        pass

    @abstractmethod
    async def save(self, response: Response) -> Response:
        """Save a response."""
        pass
