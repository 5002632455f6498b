"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.auth import GetCurrentUserUseCase
from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    UpdateCommentUseCase,
)
from discuss.application.usecase.vote import ToggleVoteUseCase
from discuss.config import CommentSettings
from discuss.domain.repository import UnitOfWork
from discuss.domain.service import (
    CommentQueryService,
    CommentService,
    EventNotifier,
    JWTService,
    UserService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service,
            user_service=user_service,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        comment_query_service: CommentQueryService,
        comment_settings: CommentSettings,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_query_service=comment_query_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_query_service: CommentQueryService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_query_service=comment_query_service)

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        comment_query_service: CommentQueryService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            comment_query_service=comment_query_service,
            event_notifier=event_notifier,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        comment_service: CommentService,
        comment_query_service: CommentQueryService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service,
            comment_query_service=comment_query_service,
            event_notifier=event_notifier,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            event_notifier=event_notifier,
            unit_of_work=unit_of_work,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_vote_use_case(
        self,
        vote_service: VoteService,
        comment_query_service: CommentQueryService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> ToggleVoteUseCase:
        """Provide toggle vote use case."""
        return ToggleVoteUseCase(
            vote_service=vote_service,
            comment_query_service=comment_query_service,
            event_notifier=event_notifier,
            unit_of_work=unit_of_work,
        )
