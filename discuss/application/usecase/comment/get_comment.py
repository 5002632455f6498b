"""Get comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.model import CommentView
from discuss.domain.service import CommentQueryService
from discuss.domain.value import parse_comment_id


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentUseCase(BaseUseCase):
    """Use case for reading a single comment with its replies."""

    def __init__(self, comment_query_service: CommentQueryService) -> None:
        self.comment_query_service = comment_query_service

    async def execute(self, request: GetCommentRequest) -> CommentView:
        """Execute get comment flow.

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment doesn't exist
        """
        return await self.comment_query_service.get_comment(
            parse_comment_id(request.comment_id)
        )
