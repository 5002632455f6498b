"""Domain services."""

from .base import Service
from .comment_query_service import CommentQueryService
from .comment_service import CommentService
from .event_notifier import EventNotifier, EventSink, topic_for
from .jwt_service import JWTService
from .ownership_guard import OwnershipGuard
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "CommentQueryService",
    "CommentService",
    "EventNotifier",
    "EventSink",
    "JWTService",
    "OwnershipGuard",
    "Service",
    "UserService",
    "VoteService",
    "topic_for",
]
