"""Vote domain service."""

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model.comment import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, UserId, VoteKind

from .base import Service


class VoteService(Service):
    """Domain service for like/dislike toggling.

    Likes and dislikes are mutually exclusive: casting one clears the other.
    Toggling is self-canceling, so a second identical vote removes the
    first instead of being rejected.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize vote service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Toggle a user's like on a comment, clearing any dislike.

        Returns:
            The refreshed comment

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        return await self.toggle(comment_id, user_id, VoteKind.LIKE)

    async def toggle_dislike(
        self, comment_id: CommentId, user_id: UserId
    ) -> Comment:
        """Toggle a user's dislike on a comment, clearing any like.

        Returns:
            The refreshed comment

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        return await self.toggle(comment_id, user_id, VoteKind.DISLIKE)

    async def toggle(
        self, comment_id: CommentId, user_id: UserId, kind: VoteKind
    ) -> Comment:
        """Toggle membership of a user in one vote set of a comment.

        Steps:
        1. Remove the user from the opposite set if present
        2. Remove the user from the target set if present, otherwise add

        Each step is a single atomic set operation on the store.

        Args:
            comment_id: Comment ID
            user_id: Voting user ID
            kind: Target vote kind

        Returns:
            The refreshed comment

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "vote_service.toggle",
            comment_id=str(comment_id),
            user_id=str(user_id),
            kind=kind.value,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Vote on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            opposite = kind.opposite
            if user_id in comment.voters(opposite):
                await self.comment_repository.remove_vote(comment_id, user_id, opposite)
                logfire.info(
                    "Opposite vote cleared",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                    kind=opposite.value,
                )

            if user_id in comment.voters(kind):
                await self.comment_repository.remove_vote(comment_id, user_id, kind)
                logfire.info(
                    "Vote removed",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                    kind=kind.value,
                )
            else:
                await self.comment_repository.add_vote(comment_id, user_id, kind)
                logfire.info(
                    "Vote added",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                    kind=kind.value,
                )

            refreshed = await self.comment_repository.find_by_id(comment_id)
            if not refreshed:
                # Deleted concurrently between the vote and the re-read
                raise NotFoundError("Comment", str(comment_id))
            return refreshed
