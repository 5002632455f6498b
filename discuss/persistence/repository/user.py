"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId, Username
from discuss.persistence.mappers import row_to_user, user_to_dict
from discuss.persistence.repository.common import store_operation
from discuss.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        with store_operation("user_repository.find_by_id", user_id=str(user_id)):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users by ID.

        Args:
            user_ids: IDs to look up

        Returns:
            Found users
        """
        if not user_ids:
            return []

        with store_operation("user_repository.find_by_ids", count=len(user_ids)):
            stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
            result = await self.session.execute(stmt)
            return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: Username to search for

        Returns:
            User if found, None otherwise
        """
        with store_operation("user_repository.find_by_username"):
            stmt = select(users_table).where(users_table.c.username == username.root)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with store_operation("user_repository.save", user_id=str(user.id)):
            existing = await self.find_by_id(user.id)

            user_dict = user_to_dict(user)

            if existing:
                stmt = (
                    users_table.update()
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

            await self.session.flush()
            return user
