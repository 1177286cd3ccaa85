"""Mock persistence providers for testing."""

from dishka import Scope, provide

from pinboard.domain.repository import (
    DirectMessageRepository,
    FollowRepository,
    NotificationRepository,
    ResponseRepository,
    ThreadRepository,
    UserRepository,
    VoteRepository,
)
from pinboard.persistence.repository.inmemory import (
    InMemoryDirectMessageRepository,
    InMemoryFollowRepository,
    InMemoryNotificationRepository,
    InMemoryResponseRepository,
    InMemoryStore,
    InMemoryThreadRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from pinboard.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store lives at APP scope so every request made against one container
    sees the same data; each test builds its own container for isolation.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory store."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_thread_repository(self, store: InMemoryStore) -> ThreadRepository:
        """Provide in-memory thread repository."""
        return InMemoryThreadRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_response_repository(self, store: InMemoryStore) -> ResponseRepository:
        """Provide in-memory response repository."""
        return InMemoryResponseRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, store: InMemoryStore) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, store: InMemoryStore
    ) -> NotificationRepository:
        """Provide in-memory notification repository."""
        return InMemoryNotificationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_direct_message_repository(
        self, store: InMemoryStore
    ) -> DirectMessageRepository:
        """Provide in-memory direct message repository."""
        return InMemoryDirectMessageRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_follow_repository(self, store: InMemoryStore) -> FollowRepository:
        """Provide in-memory follow repository."""
        return InMemoryFollowRepository(store)
