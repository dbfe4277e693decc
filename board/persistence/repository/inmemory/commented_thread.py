"""In-memory commented-threads repository for testing."""

from typing import Optional

from board.domain.model.commented_thread import CommentedThread
from board.domain.repository.commented_thread import CommentedThreadRepository
from board.domain.value import ThreadId, UserId

from .store import InMemoryStore


class InMemoryCommentedThreadRepository(CommentedThreadRepository):
    """In-memory implementation of CommentedThreadRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find(
        self, user_id: UserId, thread_id: ThreadId
    ) -> Optional[CommentedThread]:
        """Find the entry for a user and thread."""
        return self.store.commented_threads.get((user_id, thread_id))

    async def find_by_user(self, user_id: UserId) -> list[CommentedThread]:
        """Find every thread a user has commented on, most recent first."""
        entries = [
            e for (uid, _), e in self.store.commented_threads.items() if uid == user_id
        ]
        entries.sort(key=lambda e: e.last_commented_at, reverse=True)
        return entries

    async def upsert(self, entry: CommentedThread) -> CommentedThread:
        """Create the entry or refresh its last_commented_at."""
        self.store.commented_threads[(entry.user_id, entry.thread_id)] = entry
        return entry

    async def delete(self, user_id: UserId, thread_id: ThreadId) -> None:
        """Remove the entry for a user and thread, if present."""
        self.store.commented_threads.pop((user_id, thread_id), None)
