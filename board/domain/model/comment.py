"""Comment entity.

Comments are stored flat: the only structural information a comment carries
is its own ``parent_id`` and ``depth``. Thread shape is rebuilt on read by
the thread resolver.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from board.domain.model.common import DomainModel, utc_now
from board.domain.value import CommentId, ThreadId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a thread or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for a root comment)
    - depth: Nesting level (0 for roots, parent depth + 1 for replies)

    A soft-deleted comment keeps parent_id/depth (so the tree keeps its shape)
    but loses its author and content.
    """

    id: CommentId
    thread_id: ThreadId
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    author_id: Optional[UserId] = None
    author_name: Optional[str] = None
    parent_author_id: Optional[UserId] = None
    content: str = ""
    likes_count: int = Field(default=0, ge=0)
    reports_count: int = Field(default=0, ge=0)
    is_deleted: bool = False
    is_locked: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_depth(self) -> "Comment":
        """Root comments sit at depth 0, replies below it."""
        if self.parent_id is None and self.depth != 0:
            raise ValueError("Root comments must have depth 0")
        if self.parent_id is not None and self.depth == 0:
            raise ValueError("Replies must have depth >= 1")
        return self

    @property
    def is_root(self) -> bool:
        """True for comments without a parent."""
        return self.parent_id is None

    def sort_key(self) -> tuple[datetime, str]:
        """Stable ordering key: creation time, tie-broken by id."""
        return (self.created_at, str(self.id))
