"""Soft vs. hard delete decision.

A comment with live (not soft-deleted) direct replies is anonymized in
place so the replies keep their parent. A comment without live replies is
removed and uncounted.
"""

import logfire

from board.config import CommentSettings
from board.domain.model.comment import Comment
from board.domain.model.common import utc_now
from board.domain.repository import Transaction
from board.domain.value import DeletionOutcome

from .base import Service
from .counter_ledger import CounterLedger


class DeletionPolicy(Service):
    """Chooses and performs the delete path for a comment."""

    def __init__(self, counter_ledger: CounterLedger, settings: CommentSettings) -> None:
        """Initialize deletion policy.

        Args:
            counter_ledger: Ledger applying the hard-delete counter deltas
            settings: Comment settings (placeholder texts)
        """
        self.counter_ledger = counter_ledger
        self.settings = settings

    async def apply(self, tx: Transaction, comment: Comment) -> DeletionOutcome:
        """Delete ``comment`` inside ``tx``.

        Args:
            tx: Active transaction
            comment: Comment read in this transaction (not already deleted)

        Returns:
            SOFT_DELETED when live replies exist, HARD_DELETED otherwise
        """
        if await tx.comments.has_live_children(comment.id):
            await tx.comments.save(self.anonymize(comment))
            logfire.info(
                "Comment soft deleted",
                comment_id=str(comment.id),
                thread_id=str(comment.thread_id),
            )
            return DeletionOutcome.SOFT_DELETED

        await tx.comments.delete(comment.id)
        count = await self.counter_ledger.record_hard_deleted(tx, comment)
        logfire.info(
            "Comment hard deleted",
            comment_id=str(comment.id),
            thread_id=str(comment.thread_id),
            comments_count=count,
        )
        return DeletionOutcome.HARD_DELETED

    def anonymize(self, comment: Comment) -> Comment:
        """Soft-deleted copy: same position in the tree, no author or content."""
        return comment.model_copy(
            update={
                "author_id": None,
                "author_name": self.settings.unknown_author_name,
                "content": self.settings.deleted_placeholder,
                "is_deleted": True,
                "updated_at": utc_now(),
            }
        )
