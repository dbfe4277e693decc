"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase, parse_id, parse_user_id
from board.domain.model import Comment
from board.domain.service import CommentService
from board.domain.value import CommentId, ThreadId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    thread_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str
    parent_id: str | None = None  # Parent comment ID for replies


class CommentResponse(BaseModel):
    """A single comment as returned by write operations."""

    comment_id: str
    thread_id: str
    parent_id: str | None
    depth: int
    author_id: str | None
    author_name: str | None
    parent_author_id: str | None
    content: str
    likes_count: int
    is_deleted: bool
    is_locked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        """Build the response from a domain comment."""
        return cls(
            comment_id=str(comment.id),
            thread_id=str(comment.thread_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            author_id=str(comment.author_id) if comment.author_id else None,
            author_name=comment.author_name,
            parent_author_id=(
                str(comment.parent_author_id) if comment.parent_author_id else None
            ),
            content=comment.content,
            likes_count=comment.likes_count,
            is_deleted=comment.is_deleted,
            is_locked=comment.is_locked,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a thread or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotFoundError: If the thread or parent comment does not exist
            ValidationError: If the content or parent is invalid
        """
        parent_id = (
            CommentId(parse_id(request.parent_id, "Comment"))
            if request.parent_id
            else None
        )
        comment = await self.comment_service.create_comment(
            thread_id=ThreadId(parse_id(request.thread_id, "Thread")),
            author_id=UserId(parse_user_id(request.author_id)),
            content=request.content,
            parent_id=parent_id,
        )
        return CommentResponse.from_comment(comment)
