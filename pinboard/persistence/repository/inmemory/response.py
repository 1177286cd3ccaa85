"""In-memory response repository for testing."""

from typing import Dict, List, Optional, Sequence

from pinboard.domain.model import Response
from pinboard.domain.repository import ResponseRepository, ThreadActivity
from pinboard.domain.value import ResponseId, ThreadId

from .store import InMemoryStore


class InMemoryResponseRepository(ResponseRepository):
    """In-memory implementation of ResponseRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, response_id: ResponseId) -> Optional[Response]:
        for response in self._store.responses:
            if response.id == response_id:
                return response
        return None

    async def exists(self, response_id: ResponseId) -> bool:
        return await self.find_by_id(response_id) is not None

    async def find_by_thread(self, thread_id: ThreadId) -> List[Response]:
        responses = [r for r in self._store.responses if r.thread_id == thread_id]
        return sorted(responses, key=lambda r: r.created_at)

    async def activity_for_threads(
        self, thread_ids: Sequence[ThreadId]
    ) -> Dict[ThreadId, ThreadActivity]:
        wanted = set(thread_ids)
        activity: Dict[ThreadId, ThreadActivity] = {}
        for response in self._store.responses:
            if response.thread_id not in wanted:
                continue
            current = activity.get(response.thread_id, ThreadActivity())
            latest = current.latest_response_at
            if latest is None or response.created_at > latest:
                latest = response.created_at
            activity[response.thread_id] = ThreadActivity(
                response_count=current.response_count + 1,
                latest_response_at=latest,
            )
        return activity

    async def save(self, response: Response) -> Response:
        self._store.responses.append(response)
        return response
