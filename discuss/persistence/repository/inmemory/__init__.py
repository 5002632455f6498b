"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
