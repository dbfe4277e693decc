"""Transaction boundary for multi-document writes.

Every mutating comment operation runs as one unit of work: its reads and
writes (comment, thread counter, like, commented-thread aggregate) commit
together or not at all. Write conflicts are retried with the whole unit of
work re-executed from scratch.
"""

import asyncio
import random
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

import logfire

from board.domain.error import ConflictError, InternalError
from board.domain.repository.comment import CommentRepository
from board.domain.repository.commented_thread import CommentedThreadRepository
from board.domain.repository.like import LikeRepository
from board.domain.repository.thread import ThreadRepository

T = TypeVar("T")


class Transaction:
    """Repositories bound to a single transaction attempt."""

    def __init__(
        self,
        comments: CommentRepository,
        threads: ThreadRepository,
        likes: LikeRepository,
        commented_threads: CommentedThreadRepository,
    ) -> None:
        self.comments = comments
        self.threads = threads
        self.likes = likes
        self.commented_threads = commented_threads


Work = Callable[[Transaction], Awaitable[T]]


class TransactionManager(ABC):
    """Runs units of work atomically, retrying on write conflicts.

    Implementations provide :meth:`_attempt`, which must run ``work`` in a
    fresh transaction, commit on success and roll back on any exception.
    """

    def __init__(self, max_attempts: int = 5, backoff_seconds: float = 0.05) -> None:
        """Initialize transaction manager.

        Args:
            max_attempts: Attempts before giving up with InternalError
            backoff_seconds: Base delay between attempts (grows exponentially)
        """
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds

    async def run(self, work: Work[T]) -> T:
        """Execute ``work`` in a transaction.

        Args:
            work: Coroutine function receiving the transaction's repositories

        Returns:
            Whatever ``work`` returns

        Raises:
            InternalError: If every attempt ended in a conflict
            DomainError: Any other domain error raised by ``work`` (not retried)
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._attempt(work)
            except ConflictError as e:
                logfire.warn(
                    "Transaction conflict",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=str(e),
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self._backoff(attempt))

        logfire.error("Transaction retries exhausted", attempts=self.max_attempts)
        raise InternalError(
            f"Transaction failed after {self.max_attempts} attempts"
        )

    def _backoff(self, attempt: int) -> float:
        """Jittered exponential delay before the next attempt."""
        if self.backoff_seconds <= 0:
            return 0.0
        return self.backoff_seconds * (2 ** (attempt - 1)) * random.uniform(0.5, 1.5)

    @abstractmethod
    async def _attempt(self, work: Work[T]) -> T:
        """Run one attempt of ``work`` in its own transaction.

        Raises:
            ConflictError: If the store detected a concurrent write
        """
        pass
