"""PostgreSQL repository implementations."""

from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.unit_of_work import SessionUnitOfWork
from discuss.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCommentRepository",
    "SessionUnitOfWork",
]
