"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from board.domain.error import NotFoundError
from board.domain.model.comment import Comment
from board.domain.repository.comment import CommentRepository
from board.domain.value import CommentId, PageCursor, ThreadId, UserId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.store.comments.get(comment_id)

    async def find_roots(
        self,
        thread_id: ThreadId,
        after: Optional[PageCursor] = None,
        limit: int = 10,
    ) -> list[Comment]:
        """Find root comments of a thread after a cursor position."""
        roots = [
            c
            for c in self.store.comments.values()
            if c.thread_id == thread_id and c.parent_id is None
        ]
        if after is not None:
            position = after.sort_key()
            roots = [c for c in roots if c.sort_key() > position]
        roots.sort(key=Comment.sort_key)
        return roots[:limit]

    async def find_children(self, parent_ids: Sequence[CommentId]) -> list[Comment]:
        """Find direct replies of any of the given comments."""
        wanted = set(parent_ids)
        children = [c for c in self.store.comments.values() if c.parent_id in wanted]
        children.sort(key=Comment.sort_key)
        return children

    async def find_replies(self, thread_id: ThreadId) -> list[Comment]:
        """Find every reply of a thread."""
        replies = [
            c
            for c in self.store.comments.values()
            if c.thread_id == thread_id and c.parent_id is not None
        ]
        replies.sort(key=Comment.sort_key)
        return replies

    async def has_live_children(self, comment_id: CommentId) -> bool:
        """Check whether a comment has a non-deleted direct reply."""
        return any(
            c.parent_id == comment_id and not c.is_deleted
            for c in self.store.comments.values()
        )

    async def count_by_author_in_thread(
        self, author_id: UserId, thread_id: ThreadId
    ) -> int:
        """Count the comments an author still owns on a thread."""
        return sum(
            1
            for c in self.store.comments.values()
            if c.thread_id == thread_id and c.author_id == author_id
        )

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = self.store.comments.get(comment.id)
        if existing is None:
            comment = comment.model_copy(
                update={"created_at": self.store.next_created_at(comment.created_at)}
            )
        else:
            # Structural fields never change after insert
            comment = comment.model_copy(
                update={
                    "thread_id": existing.thread_id,
                    "parent_id": existing.parent_id,
                    "depth": existing.depth,
                    "created_at": existing.created_at,
                }
            )
        self.store.comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Physically remove a comment."""
        self.store.comments.pop(comment_id, None)

    async def increment_likes_count(self, comment_id: CommentId, delta: int) -> int:
        """Move a comment's like counter, never below zero."""
        comment = self.store.comments.get(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        count = max(0, comment.likes_count + delta)
        self.store.comments[comment_id] = comment.model_copy(
            update={"likes_count": count}
        )
        return count
