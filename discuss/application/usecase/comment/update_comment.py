"""Update comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.model import CommentView
from discuss.domain.repository import UnitOfWork
from discuss.domain.service import (
    CommentQueryService,
    CommentService,
    EventNotifier,
)
from discuss.domain.value import EventKind, parse_comment_id, parse_user_id


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    user_id: str  # User ID from authenticated user (must be the author)
    content: str


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing the content of one's own comment."""

    def __init__(
        self,
        comment_service: CommentService,
        comment_query_service: CommentQueryService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
            comment_query_service: Read-side projection service
            event_notifier: Event notifier for realtime listeners
            unit_of_work: Commit boundary, committed before any event
        """
        self.comment_service = comment_service
        self.comment_query_service = comment_query_service
        self.event_notifier = event_notifier
        self.unit_of_work = unit_of_work

    async def execute(self, request: UpdateCommentRequest) -> CommentView:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            The enriched updated comment

        Raises:
            ValidationError: If content or an ID is malformed
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user is not the author
        """
        comment = await self.comment_service.update_content(
            comment_id=parse_comment_id(request.comment_id),
            requester_id=parse_user_id(request.user_id),
            content=request.content,
        )
        view = await self.comment_query_service.enrich(comment)

        await self.unit_of_work.commit()
        await self.event_notifier.notify(EventKind.UPDATED, view.model_dump(mode="json"))
        return view
