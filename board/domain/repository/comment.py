"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from board.domain.model.comment import Comment
from board.domain.value import CommentId, PageCursor, ThreadId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are stored flat; no path or tree column exists. Queries
    return comments ordered by ``(created_at, id)`` ascending.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_roots(
        self,
        thread_id: ThreadId,
        after: Optional[PageCursor] = None,
        limit: int = 10,
    ) -> List[Comment]:
        """Find root comments of a thread, starting after a cursor position.

        Soft-deleted roots are included; they still anchor their replies.

        Args:
            thread_id: The thread ID
            after: Position of the last root already returned, if any
            limit: Maximum number of roots to return

        Returns:
            Root comments ordered by (created_at, id)
        """
        pass

    @abstractmethod
    async def find_children(self, parent_ids: Sequence[CommentId]) -> List[Comment]:
        """Find direct replies of any of the given comments.

        Callers bound ``parent_ids`` by the configured filter batch size.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Replies ordered by (created_at, id), soft-deleted included
        """
        pass

    @abstractmethod
    async def find_replies(self, thread_id: ThreadId) -> List[Comment]:
        """Find every reply (non-root comment) of a thread.

        Args:
            thread_id: The thread ID

        Returns:
            Replies ordered by (created_at, id), soft-deleted included
        """
        pass

    @abstractmethod
    async def has_live_children(self, comment_id: CommentId) -> bool:
        """Check whether a comment has at least one non-deleted direct reply.

        Args:
            comment_id: The parent comment ID

        Returns:
            True if a live reply exists
        """
        pass

    @abstractmethod
    async def count_by_author_in_thread(
        self, author_id: UserId, thread_id: ThreadId
    ) -> int:
        """Count the comments an author still owns on a thread.

        Args:
            author_id: The author's user ID
            thread_id: The thread ID

        Returns:
            Number of comments (soft-deleted comments have no author)
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        On create the store assigns ``created_at`` so that creation times
        are strictly increasing.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Physically remove a comment.

        Args:
            comment_id: The comment ID to delete
        """
        pass

    @abstractmethod
    async def increment_likes_count(self, comment_id: CommentId, delta: int) -> int:
        """Move a comment's like counter, never below zero.

        Args:
            comment_id: The comment ID
            delta: Amount to add (negative to subtract)

        Returns:
            The stored counter after the update
        """
        pass
