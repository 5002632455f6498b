"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from discuss.domain.model import Comment, User
from discuss.domain.value import CommentId, UserId, Username

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_user(username: str = "alice", **overrides) -> User:
    """Helper function to build a test user."""
    return User(
        id=overrides.pop("id", UserId(uuid4())),
        username=Username(username),
        **overrides,
    )


def make_comment(
    author_id: UserId,
    content: str = "Test comment",
    parent_id: CommentId | None = None,
    age_seconds: int = 0,
    **overrides,
) -> Comment:
    """Helper function to build a test comment.

    Args:
        author_id: Author user ID
        content: Comment text
        parent_id: Parent comment ID for replies
        age_seconds: How long ago the comment was created, for ordering tests
        **overrides: Any other Comment field

    Returns:
        Comment entity (not yet stored)
    """
    created_at = datetime.now(timezone.utc) - timedelta(seconds=age_seconds)
    return Comment(
        id=overrides.pop("id", CommentId(uuid4())),
        content=content,
        author_id=author_id,
        parent_id=parent_id,
        created_at=created_at,
        updated_at=created_at,
        **overrides,
    )
