"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from discuss.domain.model import Comment, User
from discuss.domain.value import CommentId, UserId, Username


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        avatar_url=row.get("avatar_url"),
        email=row.get("email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "username": user.username.root,
        "avatar_url": user.avatar_url,
        "email": user.email,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_comment(
    row: Dict[str, Any],
    liker_ids: Iterable[Any] = (),
    disliker_ids: Iterable[Any] = (),
    reply_ids: Iterable[Any] = (),
) -> Comment:
    """Convert database row plus its join records to Comment domain model.

    Args:
        row: comments row as dict
        liker_ids: user IDs from comment_votes with kind "like"
        disliker_ids: user IDs from comment_votes with kind "dislike"
        reply_ids: reply IDs from comment_replies, in seq order

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        content=row["content"],
        author_id=UserId(_uuid(row["author_id"])),
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        liker_ids=frozenset(UserId(_uuid(uid)) for uid in liker_ids),
        disliker_ids=frozenset(UserId(_uuid(uid)) for uid in disliker_ids),
        reply_ids=tuple(CommentId(_uuid(rid)) for rid in reply_ids),
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to a comments row dict.

    Vote sets and reply IDs are not part of the row.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": comment.id,
        "author_id": comment.author_id,
        "parent_id": comment.parent_id,
        "content": comment.content,
        "is_edited": comment.is_edited,
        "edited_at": comment.edited_at,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
