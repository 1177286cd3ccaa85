"""Application layer DI providers."""

from dishka import Scope, provide

from pinboard.application.usecase.chat import (
    ListChatsUseCase,
    OpenConversationUseCase,
    SendMessageUseCase,
)
from pinboard.application.usecase.feed import ListFeedUseCase
from pinboard.application.usecase.follow import FollowUserUseCase, UnfollowUserUseCase
from pinboard.application.usecase.notification import (
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from pinboard.application.usecase.response import CreateResponseUseCase
from pinboard.application.usecase.thread import CreateThreadUseCase
from pinboard.application.usecase.vote import GetScoreUseCase, SubmitVoteUseCase
from pinboard.domain.service import (
    FeedService,
    FollowService,
    MessageService,
    NotificationService,
    ResponseService,
    ThreadService,
    UnreadService,
    UserService,
    VoteService,
)
from pinboard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Vote use cases
    @provide
    def get_submit_vote_use_case(self, vote_service: VoteService) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(vote_service=vote_service)

    @provide
    def get_score_use_case(self, vote_service: VoteService) -> GetScoreUseCase:
        """Provide get score use case."""
        return GetScoreUseCase(vote_service=vote_service)

    # Thread and response use cases
    @provide
    def get_create_thread_use_case(
        self,
        thread_service: ThreadService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> CreateThreadUseCase:
        """Provide create thread use case."""
        return CreateThreadUseCase(
            thread_service=thread_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_create_response_use_case(
        self,
        thread_service: ThreadService,
        response_service: ResponseService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> CreateResponseUseCase:
        """Provide create response use case."""
        return CreateResponseUseCase(
            thread_service=thread_service,
            response_service=response_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    # Feed use cases
    @provide
    def get_list_feed_use_case(self, feed_service: FeedService) -> ListFeedUseCase:
        """Provide list feed use case."""
        return ListFeedUseCase(feed_service=feed_service)

    # Follow use cases
    @provide
    def get_follow_user_use_case(
        self, follow_service: FollowService
    ) -> FollowUserUseCase:
        """Provide follow user use case."""
        return FollowUserUseCase(follow_service=follow_service)

    @provide
    def get_unfollow_user_use_case(
        self, follow_service: FollowService
    ) -> UnfollowUserUseCase:
        """Provide unfollow user use case."""
        return UnfollowUserUseCase(follow_service=follow_service)

    # Notification use cases
    @provide
    def get_list_notifications_use_case(
        self,
        notification_service: NotificationService,
        unread_service: UnreadService,
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(
            notification_service=notification_service,
            unread_service=unread_service,
        )

    @provide
    def get_unread_count_use_case(
        self, unread_service: UnreadService
    ) -> GetUnreadCountUseCase:
        """Provide unread count use case."""
        return GetUnreadCountUseCase(unread_service=unread_service)

    @provide
    def get_mark_notification_read_use_case(
        self, unread_service: UnreadService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(unread_service=unread_service)

    @provide
    def get_mark_all_notifications_read_use_case(
        self, unread_service: UnreadService
    ) -> MarkAllNotificationsReadUseCase:
        """Provide mark all notifications read use case."""
        return MarkAllNotificationsReadUseCase(unread_service=unread_service)

    # Chat use cases
    @provide
    def get_list_chats_use_case(
        self, message_service: MessageService
    ) -> ListChatsUseCase:
        """Provide list chats use case."""
        return ListChatsUseCase(message_service=message_service)

    @provide
    def get_open_conversation_use_case(
        self, message_service: MessageService
    ) -> OpenConversationUseCase:
        """Provide open conversation use case."""
        return OpenConversationUseCase(message_service=message_service)

    @provide
    def get_send_message_use_case(
        self, message_service: MessageService
    ) -> SendMessageUseCase:
        """Provide send message use case."""
        return SendMessageUseCase(message_service=message_service)
