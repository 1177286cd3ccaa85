"""Domain layer DI providers."""

from dishka import Scope, provide

from pinboard.config import (
    AuthSettings,
    FeedSettings,
    MentionSettings,
    NotificationSettings,
)
from pinboard.domain.repository import (
    DirectMessageRepository,
    FollowRepository,
    NotificationRepository,
    ResponseRepository,
    ThreadRepository,
    UserRepository,
    VoteRepository,
)
from pinboard.domain.service import (
    FeedService,
    FollowService,
    JWTService,
    MentionService,
    MessageService,
    NotificationService,
    ResponseService,
    ThreadService,
    UnreadService,
    UserService,
    VoteService,
)
from pinboard.domain.value import VotableType
from pinboard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_thread_service(self, thread_repository: ThreadRepository) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(thread_repository=thread_repository)

    @provide
    def get_response_service(
        self, response_repository: ResponseRepository
    ) -> ResponseService:
        """Provide response domain service."""
        return ResponseService(response_repository=response_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        thread_repository: ThreadRepository,
        response_repository: ResponseRepository,
    ) -> VoteService:
        """Provide vote domain service with per-type existence checks."""
        return VoteService(
            vote_repository=vote_repository,
            existence_checks={
                VotableType.THREAD: thread_repository.exists,
                VotableType.RESPONSE: response_repository.exists,
            },
        )

    @provide
    def get_mention_service(
        self, user_repository: UserRepository, mention_settings: MentionSettings
    ) -> MentionService:
        """Provide mention resolver."""
        return MentionService(
            user_repository=user_repository, mention_settings=mention_settings
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        mention_service: MentionService,
        notification_settings: NotificationSettings,
    ) -> NotificationService:
        """Provide notification fan-out service."""
        return NotificationService(
            notification_repository=notification_repository,
            mention_service=mention_service,
            notification_settings=notification_settings,
        )

    @provide
    def get_unread_service(
        self,
        notification_repository: NotificationRepository,
        direct_message_repository: DirectMessageRepository,
    ) -> UnreadService:
        """Provide unread counter service."""
        return UnreadService(
            notification_repository=notification_repository,
            direct_message_repository=direct_message_repository,
        )

    @provide
    def get_feed_service(
        self,
        thread_repository: ThreadRepository,
        response_repository: ResponseRepository,
        follow_repository: FollowRepository,
        vote_service: VoteService,
        feed_settings: FeedSettings,
    ) -> FeedService:
        """Provide feed ranking service."""
        return FeedService(
            thread_repository=thread_repository,
            response_repository=response_repository,
            follow_repository=follow_repository,
            vote_service=vote_service,
            feed_settings=feed_settings,
        )

    @provide
    def get_follow_service(
        self,
        follow_repository: FollowRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(
            follow_repository=follow_repository,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_message_service(
        self,
        direct_message_repository: DirectMessageRepository,
        user_repository: UserRepository,
        thread_repository: ThreadRepository,
        user_service: UserService,
        unread_service: UnreadService,
        notification_service: NotificationService,
    ) -> MessageService:
        """Provide direct message service."""
        return MessageService(
            direct_message_repository=direct_message_repository,
            user_repository=user_repository,
            thread_repository=thread_repository,
            user_service=user_service,
            unread_service=unread_service,
            notification_service=notification_service,
        )
