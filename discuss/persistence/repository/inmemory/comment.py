"""In-memory comment repository for testing."""

from typing import Any, List, Optional, Sequence

from discuss.domain.error import ValidationError
from discuss.domain.model.comment import Comment
from discuss.domain.model.common import utc_now
from discuss.domain.repository.comment import (
    UPDATABLE_FIELDS,
    CommentFilter,
    CommentRepository,
)
from discuss.domain.value import CommentId, CommentSortOrder, UserId, VoteKind


def _sort_key(sort: CommentSortOrder):
    if sort == CommentSortOrder.MOST_LIKED:
        return lambda c: (c.like_count, c.created_at, c.id)
    if sort == CommentSortOrder.MOST_DISLIKED:
        return lambda c: (c.dislike_count, c.created_at, c.id)
    return lambda c: (c.created_at, c.id)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mirrors the PostgreSQL schema: deleting a comment also drops it from
    every reply list it appears in.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments by ID, preserving the requested order."""
        return [self._comments[cid] for cid in comment_ids if cid in self._comments]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        children.sort(key=lambda c: (c.created_at, c.id))
        return children

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stored = comment.model_copy(
            update={
                "liker_ids": frozenset(),
                "disliker_ids": frozenset(),
                "reply_ids": (),
            }
        )
        self._comments[stored.id] = stored
        return stored

    async def update_fields(
        self, comment_id: CommentId, **fields: Any
    ) -> Optional[Comment]:
        """Update scalar fields of a comment and bump updated_at."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {sorted(unknown)}")

        comment = self._comments.get(comment_id)
        if not comment:
            return None

        updated = comment.model_copy(update={**fields, "updated_at": utc_now()})
        self._comments[comment_id] = updated
        return updated

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and every reply edge that points at it."""
        if self._comments.pop(comment_id, None) is None:
            return

        for cid, comment in list(self._comments.items()):
            if comment_id in comment.reply_ids:
                self._comments[cid] = comment.model_copy(
                    update={
                        "reply_ids": tuple(
                            rid for rid in comment.reply_ids if rid != comment_id
                        )
                    }
                )

    async def query(
        self,
        filter: CommentFilter,
        sort: CommentSortOrder = CommentSortOrder.NEWEST,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[List[Comment], int]:
        """Find comments with filtering, sorting and pagination."""
        comments = [c for c in self._comments.values() if filter.matches(c)]
        comments.sort(key=_sort_key(sort), reverse=True)
        return comments[offset : offset + limit], len(comments)

    async def add_vote(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> None:
        """Add a user to a vote set."""
        comment = self._comments.get(comment_id)
        if not comment:
            return

        field = "liker_ids" if kind is VoteKind.LIKE else "disliker_ids"
        self._comments[comment_id] = comment.model_copy(
            update={field: comment.voters(kind) | {user_id}}
        )

    async def remove_vote(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> bool:
        """Remove a user from a vote set."""
        comment = self._comments.get(comment_id)
        if not comment or user_id not in comment.voters(kind):
            return False

        field = "liker_ids" if kind is VoteKind.LIKE else "disliker_ids"
        self._comments[comment_id] = comment.model_copy(
            update={field: comment.voters(kind) - {user_id}}
        )
        return True

    async def append_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Append a reply ID to a parent's reply list."""
        parent = self._comments.get(parent_id)
        if not parent or reply_id in parent.reply_ids:
            return

        self._comments[parent_id] = parent.model_copy(
            update={"reply_ids": (*parent.reply_ids, reply_id)}
        )

    async def remove_reply(self, parent_id: CommentId, reply_id: CommentId) -> bool:
        """Remove a reply ID from a parent's reply list."""
        parent = self._comments.get(parent_id)
        if not parent or reply_id not in parent.reply_ids:
            return False

        self._comments[parent_id] = parent.model_copy(
            update={
                "reply_ids": tuple(rid for rid in parent.reply_ids if rid != reply_id)
            }
        )
        return True
