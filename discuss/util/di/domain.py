"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings, CommentSettings
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.service import (
    CommentQueryService,
    CommentService,
    EventNotifier,
    EventSink,
    JWTService,
    OwnershipGuard,
    UserService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


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
    def get_ownership_guard(self) -> OwnershipGuard:
        """Provide ownership guard."""
        return OwnershipGuard()

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        ownership_guard: OwnershipGuard,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            ownership_guard=ownership_guard,
            max_content_length=comment_settings.max_content_length,
        )

    @provide
    def get_vote_service(self, comment_repository: CommentRepository) -> VoteService:
        """Provide vote domain service."""
        return VoteService(comment_repository=comment_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_query_service(
        self,
        comment_repository: CommentRepository,
        user_service: UserService,
    ) -> CommentQueryService:
        """Provide comment query service."""
        return CommentQueryService(
            comment_repository=comment_repository,
            user_service=user_service,
        )

    @provide
    def get_event_notifier(self, sink: EventSink) -> EventNotifier:
        """Provide event notifier bound to the realtime sink."""
        return EventNotifier(sink=sink)
