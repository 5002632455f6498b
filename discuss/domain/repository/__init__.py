"""Repository interfaces for the Discuss domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from discuss.domain.repository.comment import CommentFilter, CommentRepository
from discuss.domain.repository.unit_of_work import UnitOfWork
from discuss.domain.repository.user import UserRepository

__all__ = [
    "CommentFilter",
    "CommentRepository",
    "UnitOfWork",
    "UserRepository",
]
