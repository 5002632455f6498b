"""User domain service."""

from typing import Iterable

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model import AuthorSummary, User
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_author_summaries(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, AuthorSummary]:
        """Load author summaries for a set of users in one query.

        Unknown users are left out of the result.

        Args:
            user_ids: User IDs to summarize

        Returns:
            Mapping of user ID to author summary
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}

        users = await self.user_repository.find_by_ids(unique_ids)
        summaries = {user.id: AuthorSummary.from_user(user) for user in users}
        if len(summaries) < len(unique_ids):
            logfire.warn(
                "Authors missing for comments",
                requested=len(unique_ids),
                found=len(summaries),
            )
        return summaries
