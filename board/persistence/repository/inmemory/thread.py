"""In-memory thread repository for testing."""

from typing import Optional

from board.domain.error import NotFoundError
from board.domain.model.thread import Thread
from board.domain.repository.thread import ThreadRepository
from board.domain.value import ThreadId

from .store import InMemoryStore


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        return self.store.threads.get(thread_id)

    async def save(self, thread: Thread) -> Thread:
        """Save a thread (create or update)."""
        existing = self.store.threads.get(thread.id)
        if existing is not None:
            thread = thread.model_copy(
                update={"comments_count": existing.comments_count}
            )
        self.store.threads[thread.id] = thread
        return thread

    async def increment_comments_count(self, thread_id: ThreadId, delta: int) -> int:
        """Move a thread's comment counter, never below zero."""
        thread = self.store.threads.get(thread_id)
        if thread is None:
            raise NotFoundError("Thread", str(thread_id))
        count = max(0, thread.comments_count + delta)
        self.store.threads[thread_id] = thread.model_copy(
            update={"comments_count": count}
        )
        return count

    async def increment_likes_count(self, thread_id: ThreadId, delta: int) -> int:
        """Move a thread's like counter, never below zero."""
        thread = self.store.threads.get(thread_id)
        if thread is None:
            raise NotFoundError("Thread", str(thread_id))
        count = max(0, thread.likes_count + delta)
        self.store.threads[thread_id] = thread.model_copy(update={"likes_count": count})
        return count
