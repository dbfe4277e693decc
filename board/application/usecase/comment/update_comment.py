"""Update comment use case."""

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase, parse_id, parse_user_id
from board.application.usecase.comment.create_comment import CommentResponse
from board.domain.service import CommentService
from board.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    content: str  # New content (cannot be empty after sanitization)


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the user doesn't own the comment
            ValidationError: If the comment is deleted or locked, or the
                content is empty
        """
        comment = await self.comment_service.update_comment(
            comment_id=CommentId(parse_id(request.comment_id, "Comment")),
            author_id=UserId(parse_user_id(request.user_id)),
            content=request.content,
        )
        return CommentResponse.from_comment(comment)
