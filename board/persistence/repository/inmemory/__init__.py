"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .commented_thread import InMemoryCommentedThreadRepository
from .like import InMemoryLikeRepository
from .profile import InMemoryProfileDirectory
from .store import InMemoryStore
from .thread import InMemoryThreadRepository
from .transaction import InMemoryTransactionManager

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentedThreadRepository",
    "InMemoryLikeRepository",
    "InMemoryProfileDirectory",
    "InMemoryStore",
    "InMemoryThreadRepository",
    "InMemoryTransactionManager",
]
