"""Thread aggregate root.

A thread is the content item (community post or mission post) that owns a
comment set. The post itself is managed elsewhere; the comment core only
owns ``comments_count`` and reads ``is_locked``.
"""

from datetime import datetime

from pydantic import Field

from board.domain.model.common import DomainModel, utc_now
from board.domain.value import ThreadId, ThreadKind, UserId


class Thread(DomainModel):
    """Thread aggregate root."""

    id: ThreadId
    kind: ThreadKind = ThreadKind.COMMUNITY
    author_id: UserId
    title: str = Field(default="", max_length=300)
    comments_count: int = Field(default=0, ge=0)
    likes_count: int = Field(default=0, ge=0)
    is_locked: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
