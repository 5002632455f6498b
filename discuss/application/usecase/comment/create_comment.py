"""Create comment use case."""

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


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase):
    """Use case for posting a top-level comment or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        comment_query_service: CommentQueryService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize create comment use case.

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

    async def execute(self, request: CreateCommentRequest) -> CommentView:
        """Execute create comment flow.

        Steps:
        1. Create comment via comment service (validates content and parent)
        2. Enrich it with author and replies
        3. Commit, then emit comment:created

        Args:
            request: Create comment request

        Returns:
            The enriched new comment

        Raises:
            ValidationError: If content or an ID is malformed
            NotFoundError: If the parent comment doesn't exist
            PersistenceError: If the commit fails (no event is emitted)
        """
        parent_id = parse_comment_id(request.parent_id) if request.parent_id else None

        comment = await self.comment_service.create_comment(
            content=request.content,
            author_id=parse_user_id(request.author_id),
            parent_id=parent_id,
        )
        view = await self.comment_query_service.enrich(comment)

        await self.unit_of_work.commit()
        await self.event_notifier.notify(EventKind.CREATED, view.model_dump(mode="json"))
        return view
