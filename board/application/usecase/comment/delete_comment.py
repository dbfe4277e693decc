"""Delete comment use case."""

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase, parse_id, parse_user_id
from board.domain.service import CommentService
from board.domain.value import CommentId, DeletionOutcome, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    outcome: DeletionOutcome


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        A comment with live replies is soft deleted (anonymized in place);
        otherwise it is removed.
        """
        outcome = await self.comment_service.delete_comment(
            comment_id=CommentId(parse_id(request.comment_id, "Comment")),
            author_id=UserId(parse_user_id(request.user_id)),
        )
        return DeleteCommentResponse(comment_id=request.comment_id, outcome=outcome)
