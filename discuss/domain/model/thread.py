"""Read models for comment threads.

These are projections built by the query service: comments joined with
author summaries and (for top-level views) one level of replies. They are
never persisted in this form.
"""

from datetime import datetime
from typing import Optional

from discuss.domain.model.comment import Comment
from discuss.domain.model.common import DomainModel
from discuss.domain.model.user import User
from discuss.domain.value import CommentId, UserId


class AuthorSummary(DomainModel):
    """Denormalized author info shown next to a comment."""

    id: UserId
    display_name: str
    avatar_url: str

    @classmethod
    def from_user(cls, user: User) -> "AuthorSummary":
        return cls(
            id=user.id,
            display_name=user.username.root,
            avatar_url=user.display_avatar,
        )


class ReplyView(DomainModel):
    """A comment enriched with its author. Its own replies are not expanded."""

    id: CommentId
    content: str
    author_id: UserId
    author: Optional[AuthorSummary]
    parent_id: Optional[CommentId]
    liker_ids: list[UserId]
    disliker_ids: list[UserId]
    like_count: int
    dislike_count: int
    reply_ids: list[CommentId]
    is_edited: bool
    edited_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, comment: Comment, author: Optional[AuthorSummary]) -> "ReplyView":
        return cls(**_view_fields(comment, author))


class CommentView(ReplyView):
    """A comment enriched with its author and its direct replies."""

    replies: list[ReplyView] = []

    @classmethod
    def build(
        cls,
        comment: Comment,
        author: Optional[AuthorSummary],
        replies: Optional[list[ReplyView]] = None,
    ) -> "CommentView":
        return cls(**_view_fields(comment, author), replies=replies or [])


class PageInfo(DomainModel):
    """Offset pagination metadata."""

    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


class CommentPage(DomainModel):
    """One page of enriched top-level comments."""

    comments: list[CommentView]
    pagination: PageInfo


def _view_fields(comment: Comment, author: Optional[AuthorSummary]) -> dict:
    # Sorted so that serialized vote sets are stable across requests
    return {
        "id": comment.id,
        "content": comment.content,
        "author_id": comment.author_id,
        "author": author,
        "parent_id": comment.parent_id,
        "liker_ids": sorted(comment.liker_ids, key=str),
        "disliker_ids": sorted(comment.disliker_ids, key=str),
        "like_count": comment.like_count,
        "dislike_count": comment.dislike_count,
        "reply_ids": list(comment.reply_ids),
        "is_edited": comment.is_edited,
        "edited_at": comment.edited_at,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
