"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from discuss.domain.model.comment import Comment
from discuss.domain.value import CommentId, CommentSortOrder, UserId, VoteKind
from discuss.domain.value.common import ValueObject

# Fields that may be changed after creation via update_fields
UPDATABLE_FIELDS = frozenset({"content", "is_edited", "edited_at"})


class CommentFilter(ValueObject):
    """Filter for comment queries. Unset criteria match everything."""

    top_level_only: bool = False
    parent_id: Optional[CommentId] = None
    author_id: Optional[UserId] = None

    def matches(self, comment: Comment) -> bool:
        """Check a comment against the filter (used by in-memory stores)."""
        if self.top_level_only and comment.parent_id is not None:
            return False
        if self.parent_id is not None and comment.parent_id != self.parent_id:
            return False
        if self.author_id is not None and comment.author_id != self.author_id:
            return False
        return True


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Vote membership and reply order are changed only through the atomic
    add/remove primitives, never by rewriting the whole entity, so that
    concurrent toggles by different users cannot overwrite each other.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments by ID (batch query).

        Args:
            comment_ids: IDs to look up

        Returns:
            Found comments in the order of comment_ids; missing IDs are skipped
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment, oldest first.

        Args:
            parent_id: The parent comment ID

        Returns:
            List of comments whose parent_id is parent_id
        """
        pass

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Vote sets and reply_ids of the given comment are ignored; a new
        comment starts with none.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def update_fields(
        self, comment_id: CommentId, **fields: Any
    ) -> Optional[Comment]:
        """Update scalar fields of a comment and bump updated_at.

        Args:
            comment_id: The comment ID
            **fields: Subset of content, is_edited, edited_at

        Returns:
            The updated comment, or None if it doesn't exist

        Raises:
            ValidationError: If a field is not updatable
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Its vote memberships and reply edges go with it. Deleting a missing
        comment is a no-op.

        Args:
            comment_id: The comment ID to delete
        """
        pass

    @abstractmethod
    async def query(
        self,
        filter: CommentFilter,
        sort: CommentSortOrder = CommentSortOrder.NEWEST,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[List[Comment], int]:
        """Find comments with filtering, sorting and pagination.

        Ties on the sort key are broken by created_at then id, both
        descending.

        Args:
            filter: Filter criteria
            sort: Sort order
            offset: Number of comments to skip
            limit: Maximum number of comments to return

        Returns:
            The page of comments and the total number matching the filter
        """
        pass

    @abstractmethod
    async def add_vote(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> None:
        """Atomically add a user to a comment's like or dislike set.

        Adding an existing member is a no-op.
        """
        pass

    @abstractmethod
    async def remove_vote(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> bool:
        """Atomically remove a user from a comment's like or dislike set.

        Returns:
            True if the user was a member, False otherwise
        """
        pass

    @abstractmethod
    async def append_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Atomically append a reply ID to a parent's reply_ids.

        Appending an ID that is already present is a no-op.
        """
        pass

    @abstractmethod
    async def remove_reply(self, parent_id: CommentId, reply_id: CommentId) -> bool:
        """Atomically remove a reply ID from a parent's reply_ids.

        Returns:
            True if the ID was present, False otherwise
        """
        pass
