"""Ownership checks for comment mutations."""

from discuss.domain.error import NotAuthorizedError
from discuss.domain.model.comment import Comment
from discuss.domain.value import UserId

from .base import Service


class OwnershipGuard(Service):
    """Authorizes mutations of a comment by its requester.

    The guard is pure: callers fetch the comment first and report a missing
    comment as not found themselves, so absence is never disguised as a
    permission failure.
    """

    def authorize(self, comment: Comment, requester_id: UserId) -> None:
        """Ensure the requester authored the comment.

        Args:
            comment: The fetched comment
            requester_id: ID of the user attempting the mutation

        Raises:
            NotAuthorizedError: If the requester is not the author
        """
        if comment.author_id != requester_id:
            raise NotAuthorizedError("comment", str(comment.id), str(requester_id))
