"""Domain services."""

from .auth_guard import AuthGuard
from .base import Service
from .comment_service import CommentService
from .counter_ledger import CounterLedger
from .deletion_policy import DeletionPolicy
from .notification import NotificationGateway, NotificationService
from .pagination import PaginationEngine, ThreadPage
from .profile_directory import ProfileDirectory, ProfileService
from .thread_resolver import ThreadResolver
from .thread_service import ThreadService

__all__ = [
    "AuthGuard",
    "CommentService",
    "CounterLedger",
    "DeletionPolicy",
    "NotificationGateway",
    "NotificationService",
    "PaginationEngine",
    "ProfileDirectory",
    "ProfileService",
    "Service",
    "ThreadPage",
    "ThreadResolver",
    "ThreadService",
]
