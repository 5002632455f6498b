"""Comment entity.

Comments form a two-level thread on a single implicit resource: top-level
comments (no parent) and replies. Vote membership and reply order live in
the store as join records; the entity carries them as immutable collections.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import MAX_CONTENT_LENGTH, CommentId, UserId, VoteKind


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - reply_ids: Direct replies, in reply creation order

    A user appears in at most one of liker_ids/disliker_ids.
    """

    id: CommentId
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    author_id: UserId
    parent_id: Optional[CommentId] = None
    liker_ids: frozenset[UserId] = frozenset()
    disliker_ids: frozenset[UserId] = frozenset()
    reply_ids: tuple[CommentId, ...] = ()
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def like_count(self) -> int:
        return len(self.liker_ids)

    @property
    def dislike_count(self) -> int:
        return len(self.disliker_ids)

    def voters(self, kind: VoteKind) -> frozenset[UserId]:
        """Return the membership set for a vote kind."""
        return self.liker_ids if kind is VoteKind.LIKE else self.disliker_ids
