"""In-memory unit of work for testing."""

from discuss.domain.error import PersistenceError
from discuss.domain.repository import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Counts commits; in-memory writes are visible immediately.

    Set fail=True to simulate a store that rejects the commit.
    """

    def __init__(self, fail: bool = False) -> None:
        self.commits = 0
        self.fail = fail

    async def commit(self) -> None:
        if self.fail:
            raise PersistenceError("unit_of_work.commit")
        self.commits += 1
