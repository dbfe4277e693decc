"""Cursor pagination over root comments."""

from typing import Optional

import logfire
from pydantic import Field

from board.config import CommentSettings
from board.domain.error import ValidationError
from board.domain.model.comment import Comment
from board.domain.model.common import DomainModel
from board.domain.model.thread import Thread
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, PageCursor

from .base import Service
from .thread_resolver import ThreadResolver


class ThreadPage(DomainModel):
    """Root comments of one page with their (possibly truncated) replies."""

    roots: list[Comment]
    replies: dict[CommentId, list[Comment]] = Field(default_factory=dict)
    replies_count: dict[CommentId, int] = Field(default_factory=dict)
    page_size: int
    has_next: bool = False
    next_cursor: Optional[str] = None


class PaginationEngine(Service):
    """Produces stable pages of root comments ordered by (created_at, id).

    Pages are addressed by an opaque cursor rather than an offset, so
    comments inserted while a reader pages through the thread never shift
    or duplicate entries.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        thread_resolver: ThreadResolver,
        settings: CommentSettings,
    ) -> None:
        """Initialize pagination engine.

        Args:
            comment_repository: Comment repository
            thread_resolver: Resolver used to group replies under roots
            settings: Comment settings (page sizes, reply preview limit)
        """
        self.comment_repository = comment_repository
        self.thread_resolver = thread_resolver
        self.settings = settings

    def effective_page_size(self, page_size: Optional[int]) -> int:
        """Apply the default and the root fan-out cap to a requested size.

        Raises:
            ValidationError: If page_size is below 1
        """
        if page_size is None:
            page_size = self.settings.default_page_size
        if page_size < 1:
            raise ValidationError("page_size must be at least 1")
        if page_size > self.settings.max_roots_per_page:
            logfire.warn(
                "Requested page size exceeds root fan-out cap, clamping",
                requested=page_size,
                max_roots_per_page=self.settings.max_roots_per_page,
            )
            page_size = self.settings.max_roots_per_page
        return page_size

    async def fetch_page(
        self,
        thread: Thread,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> ThreadPage:
        """Fetch one page of roots and group their replies.

        Args:
            thread: Thread being listed
            cursor: Token from a previous page's ``next_cursor``
            page_size: Roots per page (default and cap from settings)

        Returns:
            The page

        Raises:
            ValidationError: On a malformed cursor or page_size < 1
        """
        with logfire.span(
            "pagination.fetch_page",
            thread_id=str(thread.id),
            has_cursor=cursor is not None,
        ):
            size = self.effective_page_size(page_size)
            after = PageCursor.decode(cursor) if cursor else None

            # Read one extra row to learn whether another page exists
            rows = await self.comment_repository.find_roots(
                thread.id, after=after, limit=size + 1
            )
            has_next = len(rows) > size
            roots = rows[:size]

            next_cursor = None
            if has_next:
                last = roots[-1]
                next_cursor = PageCursor(
                    created_at=last.created_at, comment_id=last.id
                ).encode()

            grouped = await self.thread_resolver.resolve(
                thread.id, roots, thread.kind.resolution_mode
            )

            limit = self.settings.replies_preview_limit
            replies = {root_id: items[:limit] for root_id, items in grouped.items()}
            replies_count = {root_id: len(items) for root_id, items in grouped.items()}

            logfire.info(
                "Comment page fetched",
                thread_id=str(thread.id),
                roots=len(roots),
                replies=sum(replies_count.values()),
                has_next=has_next,
            )
            return ThreadPage(
                roots=roots,
                replies=replies,
                replies_count=replies_count,
                page_size=size,
                has_next=has_next,
                next_cursor=next_cursor,
            )
