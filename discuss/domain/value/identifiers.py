"""Strongly typed identifiers for Discuss domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

from discuss.domain.error import ValidationError

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
CommentId = NewType("CommentId", UUID)


def parse_comment_id(raw: str) -> CommentId:
    """Parse a comment ID from its string form.

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return CommentId(UUID(raw))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid comment ID: {raw}")


def parse_user_id(raw: str) -> UserId:
    """Parse a user ID from its string form.

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return UserId(UUID(raw))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid user ID: {raw}")
