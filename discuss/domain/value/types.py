"""Domain value objects for Discuss.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from discuss.domain.value.common import RootValueObject

MAX_CONTENT_LENGTH = 1000


class VoteKind(str, Enum):
    """Kind of vote a user can cast on a comment.

    Likes and dislikes are mutually exclusive per user and comment.
    """

    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def opposite(self) -> "VoteKind":
        """The vote kind that must be cleared when this one is cast."""
        return VoteKind.DISLIKE if self is VoteKind.LIKE else VoteKind.LIKE


class CommentSortOrder(str, Enum):
    """Sort order for top-level comment listings."""

    NEWEST = "newest"  # created_at DESC
    MOST_LIKED = "mostLiked"  # like count DESC, then created_at DESC
    MOST_DISLIKED = "mostDisliked"  # dislike count DESC, then created_at DESC


class EventKind(str, Enum):
    """Kind of domain event emitted after a successful mutation."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    VOTED = "voted"


class CommentContent(RootValueObject[str]):
    """Comment body text.

    Surrounding whitespace is stripped; the result must be 1-1000 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip and validate content length."""
        v = v.strip()
        if not v:
            raise ValueError("Comment content is required")
        if len(v) > MAX_CONTENT_LENGTH:
            raise ValueError(
                f"Comment cannot exceed {MAX_CONTENT_LENGTH} characters"
            )
        return v


class Username(RootValueObject[str]):
    """Public display name of a user.

    Must be 3-30 characters of letters, digits, underscores, dots or hyphens.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        v = v.strip()
        if not re.match(r"^[A-Za-z0-9_.-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_', '.' or '-'"
            )
        return v
