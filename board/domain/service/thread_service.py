"""Thread domain service."""

import logfire

from board.domain.error import NotFoundError
from board.domain.model.like import LikeToggleResult
from board.domain.repository import Transaction, TransactionManager
from board.domain.value import ThreadId, UserId

from .base import Service
from .counter_ledger import CounterLedger
from .notification import NotificationService
from .profile_directory import ProfileService


class ThreadService(Service):
    """Thread-level reactions. The thread content itself is managed elsewhere."""

    def __init__(
        self,
        transaction_manager: TransactionManager,
        counter_ledger: CounterLedger,
        profile_service: ProfileService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize thread service.

        Args:
            transaction_manager: Runs the like toggle
            counter_ledger: Like record and counter deltas
            profile_service: Liker display name for notifications
            notification_service: Background notifications
        """
        self.transaction_manager = transaction_manager
        self.counter_ledger = counter_ledger
        self.profile_service = profile_service
        self.notification_service = notification_service

    async def toggle_like(self, thread_id: ThreadId, user_id: UserId) -> LikeToggleResult:
        """Like the thread, or remove the user's existing like.

        Args:
            thread_id: Thread to toggle
            user_id: Verified user

        Returns:
            Like state and count after the toggle

        Raises:
            NotFoundError: Unknown thread
        """
        with logfire.span(
            "thread_service.toggle_like",
            thread_id=str(thread_id),
            user_id=str(user_id),
        ):

            async def work(tx: Transaction):
                thread = await tx.threads.find_by_id(thread_id)
                if thread is None:
                    logfire.warn("Thread not found", thread_id=str(thread_id))
                    raise NotFoundError("Thread", str(thread_id))
                result = await self.counter_ledger.toggle_thread_like(
                    tx, thread, user_id
                )
                return thread, result

            thread, result = await self.transaction_manager.run(work)
            logfire.info(
                "Thread like toggled",
                thread_id=str(thread_id),
                is_liked=result.is_liked,
                likes_count=result.likes_count,
            )

            if result.is_liked and thread.author_id != user_id:
                liker = (await self.profile_service.resolve([user_id]))[user_id]
                self.notification_service.thread_liked(thread, user_id, liker.name)
            return result
