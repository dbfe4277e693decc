"""Read models returned by comment listing."""

from typing import Optional

from pydantic import Field

from board.domain.model.comment import Comment
from board.domain.model.common import DomainModel
from board.domain.model.profile import Profile
from board.domain.value import ThreadId


class CommentView(DomainModel):
    """A comment enriched for one viewer.

    Root views carry their grouped replies; reply views leave ``replies``
    empty. ``replies_count`` is the true number of replies under the root,
    even when ``replies`` was truncated for display.
    """

    comment: Comment
    author: Profile
    is_liked: bool = False
    is_mine: bool = False
    is_thread_author: bool = False
    replies: list["CommentView"] = Field(default_factory=list)
    replies_count: int = Field(default=0, ge=0)


class PageInfo(DomainModel):
    """Cursor pagination state."""

    page_size: int
    has_next: bool
    next_cursor: Optional[str] = None


class CommentListing(DomainModel):
    """One page of root comments with their replies."""

    thread_id: ThreadId
    roots: list[CommentView]
    page_info: PageInfo
