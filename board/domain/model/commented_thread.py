"""Per-user "threads I've commented on" aggregate entry."""

from datetime import datetime

from pydantic import Field

from board.domain.model.common import DomainModel, utc_now
from board.domain.value import ThreadId, UserId


class CommentedThread(DomainModel):
    """Marks that a user has at least one comment on a thread.

    Identity is ``(user_id, thread_id)``. Created or refreshed on every
    comment, removed when the user's last comment on the thread is hard
    deleted.
    """

    user_id: UserId
    thread_id: ThreadId
    last_commented_at: datetime = Field(default_factory=utc_now)
