"""Comment notifications.

Notifications are side effects of a committed write. They are dispatched
in the background and never awaited by the operation that caused them.
"""

from abc import ABC, abstractmethod
from typing import Optional

import logfire

from board.domain.model.comment import Comment
from board.domain.model.thread import Thread
from board.domain.value import NotificationKind, UserId
from board.util.sanitize import preview
from board.util.tasks import BackgroundTaskDispatcher

from .base import Service


class NotificationGateway(ABC):
    """Push delivery channel."""

    @abstractmethod
    async def notify(
        self, user_id: UserId, kind: NotificationKind, payload: dict[str, str]
    ) -> None:
        """Deliver one notification.

        Args:
            user_id: Recipient
            kind: Notification category
            payload: Title, message and deep-link ids

        Raises:
            ProviderError: If delivery failed
        """
        pass


class NotificationService(Service):
    """Builds comment notifications and hands them to the background dispatcher."""

    def __init__(
        self,
        gateway: NotificationGateway,
        dispatcher: BackgroundTaskDispatcher,
        preview_length: int = 10,
        enabled: bool = True,
    ) -> None:
        """Initialize notification service.

        Args:
            gateway: Delivery channel
            dispatcher: Background task dispatcher
            preview_length: Characters of comment text quoted in messages
            enabled: When False nothing is sent
        """
        self.gateway = gateway
        self.dispatcher = dispatcher
        self.preview_length = preview_length
        self.enabled = enabled

    def send(self, user_id: UserId, kind: NotificationKind, payload: dict[str, str]) -> None:
        """Schedule a notification without waiting for it."""
        if not self.enabled:
            return
        self.dispatcher.dispatch(
            self.gateway.notify(user_id, kind, payload),
            name=f"notify.{kind.value}",
        )
        logfire.debug("Notification scheduled", user_id=str(user_id), kind=kind.value)

    def comment_created(
        self,
        thread: Thread,
        comment: Comment,
        parent: Optional[Comment] = None,
    ) -> None:
        """Tell the thread author, and the parent author for a reply.

        Nobody is notified about their own action. A parent author who also
        wrote the thread gets both notifications.
        """
        commenter = comment.author_name or "Someone"
        payload = {
            "thread_id": str(thread.id),
            "comment_id": str(comment.id),
        }

        if thread.author_id != comment.author_id:
            self.send(
                thread.author_id,
                NotificationKind.COMMENT,
                {
                    **payload,
                    "title": "New comment",
                    "message": f'{commenter} commented on "{thread.title}".',
                },
            )

        if (
            parent is not None
            and parent.author_id is not None
            and parent.author_id != comment.author_id
        ):
            quoted = preview(parent.content, self.preview_length)
            self.send(
                parent.author_id,
                NotificationKind.REPLY,
                {
                    **payload,
                    "title": "New reply",
                    "message": f'{commenter} replied to "{quoted}".',
                },
            )

    def thread_liked(self, thread: Thread, liker_id: UserId, liker_name: str) -> None:
        """Tell the thread author about a new like (never for self-likes)."""
        if thread.author_id == liker_id:
            return
        self.send(
            thread.author_id,
            NotificationKind.THREAD_LIKE,
            {
                "thread_id": str(thread.id),
                "title": "New like",
                "message": f'{liker_name} liked "{thread.title or "your post"}".',
            },
        )

    def comment_liked(self, comment: Comment, liker_id: UserId, liker_name: str) -> None:
        """Tell the comment author about a new like (never for self-likes)."""
        if comment.author_id is None or comment.author_id == liker_id:
            return
        quoted = preview(comment.content, self.preview_length)
        self.send(
            comment.author_id,
            NotificationKind.COMMENT_LIKE,
            {
                "thread_id": str(comment.thread_id),
                "comment_id": str(comment.id),
                "title": "New like",
                "message": f'{liker_name} liked your comment "{quoted}".',
            },
        )
