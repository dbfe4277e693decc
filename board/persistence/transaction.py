"""PostgreSQL transaction manager.

Each attempt runs in its own session at REPEATABLE READ. PostgreSQL aborts
one side of a concurrent read-then-write race with a serialization failure,
which is reported as a ConflictError so the whole unit of work is retried.
"""

import logfire
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import ConflictError
from board.domain.repository import Transaction, TransactionManager
from board.domain.repository.transaction import T, Work
from board.persistence.repository import (
    PostgresCommentedThreadRepository,
    PostgresCommentRepository,
    PostgresLikeRepository,
    PostgresThreadRepository,
)

# serialization_failure, deadlock_detected
CONFLICT_SQLSTATES = {"40001", "40P01"}


def is_conflict(error: DBAPIError) -> bool:
    """True when the database rejected the transaction for a concurrent write."""
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return code in CONFLICT_SQLSTATES


class PostgresTransactionManager(TransactionManager):
    """Runs units of work in REPEATABLE READ transactions."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: int = 5,
        backoff_seconds: float = 0.05,
    ) -> None:
        """Initialize transaction manager.

        Args:
            session_factory: Factory for per-attempt sessions
            max_attempts: Attempts before giving up with InternalError
            backoff_seconds: Base delay between attempts
        """
        super().__init__(max_attempts=max_attempts, backoff_seconds=backoff_seconds)
        self.session_factory = session_factory

    async def _attempt(self, work: Work[T]) -> T:
        async with self.session_factory() as session:
            try:
                await session.connection(
                    execution_options={"isolation_level": "REPEATABLE READ"}
                )
                tx = Transaction(
                    comments=PostgresCommentRepository(session),
                    threads=PostgresThreadRepository(session),
                    likes=PostgresLikeRepository(session),
                    commented_threads=PostgresCommentedThreadRepository(session),
                )
                result = await work(tx)
                await session.commit()
                return result
            except DBAPIError as e:
                await session.rollback()
                if is_conflict(e):
                    raise ConflictError("Concurrent update detected") from e
                logfire.error("Transaction failed", error=str(e))
                raise
            except Exception:
                await session.rollback()
                raise
