"""List comments use case."""

from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.config import CommentSettings
from discuss.domain.model import CommentPage
from discuss.domain.service import CommentQueryService
from discuss.domain.value import CommentSortOrder


class ListCommentsRequest(BaseModel):
    """List comments request."""

    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # None = configured default
    sort: CommentSortOrder = CommentSortOrder.NEWEST


class ListCommentsUseCase(BaseUseCase):
    """Use case for paging through top-level comments."""

    def __init__(
        self,
        comment_query_service: CommentQueryService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize list comments use case.

        Args:
            comment_query_service: Read-side projection service
            comment_settings: Page size limits
        """
        self.comment_query_service = comment_query_service
        self.comment_settings = comment_settings

    async def execute(self, request: ListCommentsRequest) -> CommentPage:
        """Execute list comments flow.

        The page size falls back to the configured default and is capped at
        the configured maximum.

        Args:
            request: Paging and sort parameters

        Returns:
            Page of enriched comments with pagination info
        """
        limit = min(
            request.limit or self.comment_settings.default_page_size,
            self.comment_settings.max_page_size,
        )
        return await self.comment_query_service.list_comments(
            page=request.page,
            limit=limit,
            sort=request.sort,
        )
