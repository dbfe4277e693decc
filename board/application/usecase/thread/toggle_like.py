"""Toggle thread like use case."""

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase, parse_id, parse_user_id
from board.domain.service import ThreadService
from board.domain.value import ThreadId, UserId


class ToggleThreadLikeRequest(BaseModel):
    """Toggle thread like request."""

    thread_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleThreadLikeResponse(BaseModel):
    """Thread like state after the toggle."""

    thread_id: str
    is_liked: bool
    likes_count: int


class ToggleThreadLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a thread."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: ToggleThreadLikeRequest) -> ToggleThreadLikeResponse:
        """Execute toggle thread like flow."""
        result = await self.thread_service.toggle_like(
            thread_id=ThreadId(parse_id(request.thread_id, "Thread")),
            user_id=UserId(parse_user_id(request.user_id)),
        )
        return ToggleThreadLikeResponse(
            thread_id=request.thread_id,
            is_liked=result.is_liked,
            likes_count=result.likes_count,
        )
