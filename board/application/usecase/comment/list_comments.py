"""List comments use case."""

from datetime import datetime

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase, parse_id, parse_user_id
from board.domain.model import CommentView
from board.domain.service import CommentService
from board.domain.value import ThreadId, UserId


class ListCommentsRequest(BaseModel):
    """List comments request."""

    thread_id: str  # UUID string
    viewer_id: str | None = None  # Set when the request is authenticated
    cursor: str | None = None
    page_size: int | None = None


class CommentItem(BaseModel):
    """A comment as shown to one viewer."""

    comment_id: str
    parent_id: str | None
    depth: int
    author_name: str
    author_avatar_url: str | None
    parent_author_id: str | None
    content: str
    likes_count: int
    is_liked: bool
    is_mine: bool
    is_thread_author: bool
    is_deleted: bool
    is_locked: bool
    created_at: datetime
    updated_at: datetime
    replies: list["CommentItem"] = []
    replies_count: int = 0

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentItem":
        """Build the item (and its replies) from a domain view."""
        comment = view.comment
        return cls(
            comment_id=str(comment.id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            author_name=view.author.name,
            author_avatar_url=view.author.avatar_url,
            parent_author_id=(
                str(comment.parent_author_id) if comment.parent_author_id else None
            ),
            content=comment.content,
            likes_count=comment.likes_count,
            is_liked=view.is_liked,
            is_mine=view.is_mine,
            is_thread_author=view.is_thread_author,
            is_deleted=comment.is_deleted,
            is_locked=comment.is_locked,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            replies=[cls.from_view(reply) for reply in view.replies],
            replies_count=view.replies_count,
        )


class PageInfoResponse(BaseModel):
    """Cursor pagination state."""

    page_size: int
    has_next: bool
    next_cursor: str | None


class ListCommentsResponse(BaseModel):
    """One page of root comments with their replies."""

    thread_id: str
    comments: list[CommentItem]
    page_info: PageInfoResponse


class ListCommentsUseCase(BaseUseCase):
    """Use case for listing a thread's comments."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Raises:
            NotFoundError: If the thread does not exist
            ValidationError: If the cursor or page size is invalid
        """
        viewer_id = (
            UserId(parse_user_id(request.viewer_id)) if request.viewer_id else None
        )
        listing = await self.comment_service.list_comments(
            thread_id=ThreadId(parse_id(request.thread_id, "Thread")),
            viewer_id=viewer_id,
            cursor=request.cursor,
            page_size=request.page_size,
        )
        return ListCommentsResponse(
            thread_id=str(listing.thread_id),
            comments=[CommentItem.from_view(view) for view in listing.roots],
            page_info=PageInfoResponse(
                page_size=listing.page_info.page_size,
                has_next=listing.page_info.has_next,
                next_cursor=listing.page_info.next_cursor,
            ),
        )
