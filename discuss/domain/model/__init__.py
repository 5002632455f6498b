"""Domain model entities for Discuss."""

from discuss.domain.model.comment import Comment
from discuss.domain.model.thread import (
    AuthorSummary,
    CommentPage,
    CommentView,
    PageInfo,
    ReplyView,
)
from discuss.domain.model.user import User

__all__ = [
    "User",
    "Comment",
    "AuthorSummary",
    "ReplyView",
    "CommentView",
    "PageInfo",
    "CommentPage",
]
