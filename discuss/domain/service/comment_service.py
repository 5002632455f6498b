"""Comment domain service."""

from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from discuss.domain.error import NotFoundError, ValidationError
from discuss.domain.model.comment import Comment
from discuss.domain.model.common import utc_now
from discuss.domain.repository import CommentRepository
from discuss.domain.value import MAX_CONTENT_LENGTH, CommentContent, CommentId, UserId

from .base import Service
from .ownership_guard import OwnershipGuard


def _validate_content(content: str, max_length: int) -> str:
    try:
        text = CommentContent(content).root
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"].removeprefix("Value error, "))
    if len(text) > max_length:
        raise ValidationError(f"Comment cannot exceed {max_length} characters")
    return text


class CommentService(Service):
    """Domain service for creating, editing and deleting comments.

    Keeps parent/child links consistent: a reply is appended to its
    parent's reply_ids on creation and detached on deletion.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        ownership_guard: OwnershipGuard,
        max_content_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            ownership_guard: Authorization check for mutations
            max_content_length: Configured content limit, at most MAX_CONTENT_LENGTH
        """
        self.comment_repository = comment_repository
        self.ownership_guard = ownership_guard
        self.max_content_length = max_content_length

    async def create_comment(
        self,
        content: str,
        author_id: UserId,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a top-level comment or a reply to another comment.

        Replies to replies are accepted; reads only expand one level.

        Args:
            content: Comment text
            author_id: Author user ID
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If content is empty or too long
            NotFoundError: If the parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.create_comment",
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = _validate_content(content, self.max_content_length)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn("Parent comment not found", parent_id=str(parent_id))
                    raise NotFoundError("Parent comment", str(parent_id))

            now = utc_now()
            comment = Comment(
                id=CommentId(uuid4()),
                content=text,
                author_id=author_id,
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.create(comment)

            if parent_id:
                await self.comment_repository.append_reply(parent_id, saved.id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                author_id=str(author_id),
                is_reply=saved.is_reply,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def update_content(
        self, comment_id: CommentId, requester_id: UserId, content: str
    ) -> Comment:
        """Replace the content of a comment and mark it edited.

        Args:
            comment_id: Comment ID
            requester_id: User attempting the edit (must be the author)
            content: New text content

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester is not the author
            ValidationError: If content is empty or too long
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            self.ownership_guard.authorize(comment, requester_id)
            text = _validate_content(content, self.max_content_length)

            updated = await self.comment_repository.update_fields(
                comment_id,
                content=text,
                is_edited=True,
                edited_at=utc_now(),
            )
            if not updated:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment content updated",
                comment_id=str(comment_id),
                content_length=len(text),
            )
            return updated

    async def delete_comment(
        self, comment_id: CommentId, requester_id: UserId
    ) -> list[CommentId]:
        """Delete a comment together with every reply beneath it.

        Steps:
        1. Fetch and authorize
        2. Delete descendants, walking the parent_id chain
        3. Delete the comment itself
        4. Detach it from its parent's reply_ids

        There is no cross-document transaction. If step 4 fails the parent
        keeps a dangling reply ID; this is logged and not treated as fatal.

        Args:
            comment_id: Comment ID
            requester_id: User attempting the delete (must be the author)

        Returns:
            IDs of every deleted comment, the requested one first

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            self.ownership_guard.authorize(comment, requester_id)

            descendant_ids = await self._collect_descendants(comment_id)
            for descendant_id in descendant_ids:
                await self.comment_repository.delete(descendant_id)

            await self.comment_repository.delete(comment_id)

            if comment.parent_id:
                try:
                    await self.comment_repository.remove_reply(
                        comment.parent_id, comment_id
                    )
                except Exception as e:
                    logfire.error(
                        "Failed to detach deleted comment from parent",
                        comment_id=str(comment_id),
                        parent_id=str(comment.parent_id),
                        error=str(e),
                    )

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                replies_deleted=len(descendant_ids),
            )
            return [comment_id, *descendant_ids]

    async def _collect_descendants(self, comment_id: CommentId) -> list[CommentId]:
        """Collect IDs of all comments below a comment, deepest last."""
        collected: list[CommentId] = []
        seen = {comment_id}
        frontier = [comment_id]
        while frontier:
            parent_id = frontier.pop(0)
            for child in await self.comment_repository.find_children(parent_id):
                if child.id in seen:
                    continue
                seen.add(child.id)
                collected.append(child.id)
                frontier.append(child.id)
        return collected
