"""Read-side projections of comment threads."""

import math

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model import (
    Comment,
    CommentPage,
    CommentView,
    PageInfo,
    ReplyView,
)
from discuss.domain.repository import CommentFilter, CommentRepository
from discuss.domain.value import CommentId, CommentSortOrder

from .base import Service
from .user_service import UserService


class CommentQueryService(Service):
    """Builds enriched, paginated views of comment threads.

    Author data is joined explicitly on read: each view batch-loads the
    authors of a comment and its direct replies, and replies are loaded
    in reply_ids order. Replies of replies are not expanded.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_service: UserService,
    ) -> None:
        """Initialize comment query service.

        Args:
            comment_repository: Comment repository
            user_service: User service for author lookups
        """
        self.comment_repository = comment_repository
        self.user_service = user_service

    async def list_comments(
        self,
        page: int = 1,
        limit: int = 10,
        sort: CommentSortOrder = CommentSortOrder.NEWEST,
    ) -> CommentPage:
        """List top-level comments with their replies.

        Args:
            page: 1-based page number
            limit: Page size
            sort: Sort order

        Returns:
            Page of enriched comments with pagination info
        """
        with logfire.span(
            "comment_query_service.list_comments",
            page=page,
            limit=limit,
            sort=sort.value,
        ):
            page = max(page, 1)
            limit = max(limit, 1)
            comments, total = await self.comment_repository.query(
                CommentFilter(top_level_only=True),
                sort=sort,
                offset=(page - 1) * limit,
                limit=limit,
            )
            views = await self.enrich_many(comments)

            pages = math.ceil(total / limit)
            logfire.info("Comments listed", count=len(views), total=total)
            return CommentPage(
                comments=views,
                pagination=PageInfo(
                    page=page,
                    limit=limit,
                    total=total,
                    pages=pages,
                    has_next=page < pages,
                    has_prev=page > 1,
                ),
            )

    async def get_comment(self, comment_id: CommentId) -> CommentView:
        """Get one enriched comment with its replies.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "comment_query_service.get_comment", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return await self.enrich(comment)

    async def enrich(self, comment: Comment) -> CommentView:
        """Project a single comment into its enriched view."""
        views = await self.enrich_many([comment])
        return views[0]

    async def enrich_many(self, comments: list[Comment]) -> list[CommentView]:
        """Project comments into enriched views.

        Uses one batch query for all replies and one for all authors,
        regardless of how many comments are on the page.
        """
        if not comments:
            return []

        reply_ids = [rid for comment in comments for rid in comment.reply_ids]
        replies = await self.comment_repository.find_by_ids(reply_ids)
        replies_by_id = {reply.id: reply for reply in replies}

        authors = await self.user_service.get_author_summaries(
            [c.author_id for c in comments] + [r.author_id for r in replies]
        )

        views = []
        for comment in comments:
            # Dangling reply IDs (reply deleted, parent not yet detached) are skipped
            reply_views = [
                ReplyView.build(reply, authors.get(reply.author_id))
                for reply in (
                    replies_by_id.get(rid) for rid in comment.reply_ids
                )
                if reply is not None
            ]
            views.append(
                CommentView.build(
                    comment, authors.get(comment.author_id), replies=reply_views
                )
            )
        return views
