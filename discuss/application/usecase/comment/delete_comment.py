"""Delete comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.repository import UnitOfWork
from discuss.domain.service import CommentService, EventNotifier
from discuss.domain.value import EventKind, parse_comment_id, parse_user_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # User ID from authenticated user (must be the author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool
    message: str
    deleted_ids: list[str]


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting one's own comment together with its replies."""

    def __init__(
        self,
        comment_service: CommentService,
        event_notifier: EventNotifier,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            event_notifier: Event notifier for realtime listeners
            unit_of_work: Commit boundary, committed before any event
        """
        self.comment_service = comment_service
        self.event_notifier = event_notifier
        self.unit_of_work = unit_of_work

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Only the requested comment is announced; its replies disappear with
        it on the client side.

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user is not the author
        """
        comment_id = parse_comment_id(request.comment_id)
        deleted = await self.comment_service.delete_comment(
            comment_id=comment_id,
            requester_id=parse_user_id(request.user_id),
        )

        await self.unit_of_work.commit()
        await self.event_notifier.notify(EventKind.DELETED, {"id": str(comment_id)})
        return DeleteCommentResponse(
            success=True,
            message="Comment deleted successfully",
            deleted_ids=[str(cid) for cid in deleted],
        )
