"""Toggle comment like use case."""

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase, parse_id, parse_user_id
from board.domain.service import CommentService
from board.domain.value import CommentId, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleLikeResponse(BaseModel):
    """Like state after the toggle."""

    comment_id: str
    is_liked: bool
    likes_count: int


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow."""
        result = await self.comment_service.toggle_like(
            comment_id=CommentId(parse_id(request.comment_id, "Comment")),
            user_id=UserId(parse_user_id(request.user_id)),
        )
        return ToggleLikeResponse(
            comment_id=request.comment_id,
            is_liked=result.is_liked,
            likes_count=result.likes_count,
        )
