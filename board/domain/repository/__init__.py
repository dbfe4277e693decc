"""Repository interfaces for the board domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from board.domain.repository.comment import CommentRepository
from board.domain.repository.commented_thread import CommentedThreadRepository
from board.domain.repository.like import LikeRepository
from board.domain.repository.thread import ThreadRepository
from board.domain.repository.transaction import Transaction, TransactionManager

__all__ = [
    "CommentRepository",
    "CommentedThreadRepository",
    "LikeRepository",
    "ThreadRepository",
    "Transaction",
    "TransactionManager",
]
