"""PostgreSQL repository implementations."""

from board.persistence.repository.comment import PostgresCommentRepository
from board.persistence.repository.commented_thread import (
    PostgresCommentedThreadRepository,
)
from board.persistence.repository.like import PostgresLikeRepository
from board.persistence.repository.profile import PostgresProfileDirectory
from board.persistence.repository.thread import PostgresThreadRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresCommentedThreadRepository",
    "PostgresLikeRepository",
    "PostgresProfileDirectory",
    "PostgresThreadRepository",
]
