"""PostgreSQL unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.repository import UnitOfWork
from discuss.persistence.repository.common import store_operation


class SessionUnitOfWork(UnitOfWork):
    """Commits the request's SQLAlchemy session.

    The session provider still commits when the request ends; that commit
    is a no-op once this one has run.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        """Commit the current transaction."""
        with store_operation("unit_of_work.commit"):
            await self.session.commit()
