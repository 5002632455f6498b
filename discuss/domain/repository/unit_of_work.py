"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commit boundary for the repositories used by one request.

    Use cases commit before announcing a mutation, so listeners never hear
    about a change that could still be rolled back.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Make every change made so far durable.

        Raises:
            PersistenceError: If the store rejects the commit
        """
        pass
