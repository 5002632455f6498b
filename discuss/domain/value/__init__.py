"""Domain value objects for Discuss."""

from discuss.domain.value.identifiers import (
    CommentId,
    UserId,
    parse_comment_id,
    parse_user_id,
)
from discuss.domain.value.types import (
    MAX_CONTENT_LENGTH,
    CommentContent,
    CommentSortOrder,
    EventKind,
    Username,
    VoteKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommentId",
    "parse_comment_id",
    "parse_user_id",
    # Types
    "MAX_CONTENT_LENGTH",
    "CommentContent",
    "CommentSortOrder",
    "EventKind",
    "Username",
    "VoteKind",
]
