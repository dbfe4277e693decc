"""Repository interface for the per-user commented-threads aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from board.domain.model.commented_thread import CommentedThread
from board.domain.value import ThreadId, UserId


class CommentedThreadRepository(ABC):
    """Repository for CommentedThread entries."""

    @abstractmethod
    async def find(
        self, user_id: UserId, thread_id: ThreadId
    ) -> Optional[CommentedThread]:
        """Find the entry for a user and thread.

        Args:
            user_id: The user's ID
            thread_id: The thread ID

        Returns:
            The entry if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[CommentedThread]:
        """Find every thread a user has commented on, most recent first.

        Args:
            user_id: The user's ID

        Returns:
            Entries ordered by last_commented_at descending
        """
        pass

    @abstractmethod
    async def upsert(self, entry: CommentedThread) -> CommentedThread:
        """Create the entry or refresh its ``last_commented_at``.

        Args:
            entry: The entry to write

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, thread_id: ThreadId) -> None:
        """Remove the entry for a user and thread, if present.

        Args:
            user_id: The user's ID
            thread_id: The thread ID
        """
        pass
