"""Denormalized counter maintenance.

Every counter change happens inside the transaction of the write that
causes it, through the transaction's repositories.
"""

from collections.abc import Awaitable, Callable
from uuid import UUID, uuid4

import logfire

from board.domain.model.comment import Comment
from board.domain.model.commented_thread import CommentedThread
from board.domain.model.common import utc_now
from board.domain.model.like import Like, LikeToggleResult
from board.domain.model.thread import Thread
from board.domain.repository import Transaction
from board.domain.value import LikeId, LikeTargetType, UserId

from .base import Service


class CounterLedger(Service):
    """Applies comment, like and aggregate deltas for a write."""

    async def record_created(self, tx: Transaction, comment: Comment) -> int:
        """Count a new comment on its thread and mark the author as a commenter.

        Args:
            tx: Active transaction
            comment: The comment just written

        Returns:
            The thread's comments_count after the increment
        """
        count = await tx.threads.increment_comments_count(comment.thread_id, 1)
        if comment.author_id is not None:
            await tx.commented_threads.upsert(
                CommentedThread(
                    user_id=comment.author_id,
                    thread_id=comment.thread_id,
                    last_commented_at=comment.created_at,
                )
            )
        return count

    async def record_hard_deleted(self, tx: Transaction, comment: Comment) -> int:
        """Uncount a removed comment and clean the author's aggregate entry.

        Must run after the comment document itself was deleted.

        Args:
            tx: Active transaction
            comment: The comment as it was before removal

        Returns:
            The thread's comments_count after the decrement
        """
        count = await tx.threads.increment_comments_count(comment.thread_id, -1)
        if comment.author_id is not None:
            remaining = await tx.comments.count_by_author_in_thread(
                comment.author_id, comment.thread_id
            )
            if remaining == 0:
                await tx.commented_threads.delete(comment.author_id, comment.thread_id)
                logfire.info(
                    "Commented thread entry removed",
                    user_id=str(comment.author_id),
                    thread_id=str(comment.thread_id),
                )
        return count

    async def toggle_comment_like(
        self, tx: Transaction, comment: Comment, user_id: UserId
    ) -> LikeToggleResult:
        """Create or remove the user's like and move likes_count with it.

        The stored counter becomes ``max(0, previous +/- 1)`` so drift in it
        never produces a negative value.

        Args:
            tx: Active transaction
            comment: The liked comment, read in this transaction
            user_id: The user toggling the like

        Returns:
            Like state and count after the toggle
        """
        return await self._toggle_like(
            tx,
            user_id,
            LikeTargetType.COMMENT,
            comment.id,
            lambda delta: tx.comments.increment_likes_count(comment.id, delta),
        )

    async def toggle_thread_like(
        self, tx: Transaction, thread: Thread, user_id: UserId
    ) -> LikeToggleResult:
        """Thread counterpart of :meth:`toggle_comment_like`."""
        return await self._toggle_like(
            tx,
            user_id,
            LikeTargetType.THREAD,
            thread.id,
            lambda delta: tx.threads.increment_likes_count(thread.id, delta),
        )

    async def _toggle_like(
        self,
        tx: Transaction,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
        move_counter: Callable[[int], Awaitable[int]],
    ) -> LikeToggleResult:
        existing = await tx.likes.find_by_user_and_target(
            user_id, target_type, target_id
        )
        if existing is not None:
            await tx.likes.delete(existing.id)
            stored = await move_counter(-1)
            return LikeToggleResult(is_liked=False, likes_count=stored)

        await tx.likes.save(
            Like(
                id=LikeId(uuid4()),
                user_id=user_id,
                target_type=target_type,
                target_id=target_id,
                created_at=utc_now(),
            )
        )
        stored = await move_counter(1)
        return LikeToggleResult(is_liked=True, likes_count=stored)
