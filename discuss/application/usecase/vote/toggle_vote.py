"""Toggle vote use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.model import CommentView
from discuss.domain.repository import UnitOfWork
from discuss.domain.service import CommentQueryService, EventNotifier, VoteService
from discuss.domain.value import EventKind, VoteKind, parse_comment_id, parse_user_id


class ToggleVoteRequest(BaseModel):
    """Toggle vote request."""

    comment_id: str
    user_id: str  # User ID from authenticated user
    vote: VoteKind


class ToggleVoteUseCase(BaseUseCase):
    """Use case for liking or disliking a comment.

    Repeating the same vote withdraws it; casting the other kind switches.
    """

    def __init__(
        self,
        vote_service: VoteService,
        comment_query_service: CommentQueryService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize toggle vote use case.

        Args:
            vote_service: Vote domain service
            comment_query_service: Read-side projection service
            event_notifier: Event notifier for realtime listeners
            unit_of_work: Commit boundary, committed before any event
        """
        self.vote_service = vote_service
        self.comment_query_service = comment_query_service
        self.event_notifier = event_notifier
        self.unit_of_work = unit_of_work

    async def execute(self, request: ToggleVoteRequest) -> CommentView:
        """Execute toggle vote flow.

        Args:
            request: Toggle vote request

        Returns:
            The enriched comment after the toggle

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the comment doesn't exist
        """
        comment_id = parse_comment_id(request.comment_id)
        user_id = parse_user_id(request.user_id)

        if request.vote is VoteKind.LIKE:
            comment = await self.vote_service.toggle_like(comment_id, user_id)
        else:
            comment = await self.vote_service.toggle_dislike(comment_id, user_id)
        view = await self.comment_query_service.enrich(comment)

        await self.unit_of_work.commit()
        await self.event_notifier.notify(
            EventKind.VOTED, view.model_dump(mode="json"), vote=request.vote
        )
        return view
