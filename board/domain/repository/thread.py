"""Thread repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from board.domain.model.thread import Thread
from board.domain.value import ThreadId


class ThreadRepository(ABC):
    """Repository for Thread aggregate.

    Threads are owned by the content domain; this core only reads them and
    maintains ``comments_count``.
    """

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID.

        Args:
            thread_id: The thread's unique identifier

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, thread: Thread) -> Thread:
        """Save a thread (create or update).

        Args:
            thread: The thread to save

        Returns:
            The saved thread
        """
        pass

    @abstractmethod
    async def increment_comments_count(self, thread_id: ThreadId, delta: int) -> int:
        """Move a thread's comment counter, never below zero.

        Args:
            thread_id: The thread ID
            delta: Amount to add (negative to subtract)

        Returns:
            The stored counter after the update
        """
        pass

    @abstractmethod
    async def increment_likes_count(self, thread_id: ThreadId, delta: int) -> int:
        """Move a thread's like counter, never below zero.

        Args:
            thread_id: The thread ID
            delta: Amount to add (negative to subtract)

        Returns:
            The stored counter after the update
        """
        pass
