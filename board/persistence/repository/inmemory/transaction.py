"""In-memory transaction manager for testing."""

from board.domain.repository import Transaction, TransactionManager
from board.domain.repository.transaction import T, Work

from .comment import InMemoryCommentRepository
from .commented_thread import InMemoryCommentedThreadRepository
from .like import InMemoryLikeRepository
from .store import InMemoryStore
from .thread import InMemoryThreadRepository


class InMemoryTransactionManager(TransactionManager):
    """Serializes units of work on one store and rolls back failed attempts."""

    def __init__(
        self,
        store: InMemoryStore,
        max_attempts: int = 5,
        backoff_seconds: float = 0.0,
    ) -> None:
        super().__init__(max_attempts=max_attempts, backoff_seconds=backoff_seconds)
        self.store = store
        self.attempts = 0

    async def _attempt(self, work: Work[T]) -> T:
        self.attempts += 1
        async with self.store.lock:
            snapshot = self.store.snapshot()
            tx = Transaction(
                comments=InMemoryCommentRepository(self.store),
                threads=InMemoryThreadRepository(self.store),
                likes=InMemoryLikeRepository(self.store),
                commented_threads=InMemoryCommentedThreadRepository(self.store),
            )
            try:
                return await work(tx)
            except BaseException:
                self.store.restore(snapshot)
                raise
