"""Thread routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from board.application.usecase.thread import (
    ToggleThreadLikeRequest,
    ToggleThreadLikeResponse,
    ToggleThreadLikeUseCase,
)
from board.domain.service import AuthGuard
from board.interface.api.token import request_token

router = APIRouter(tags=["threads"], route_class=DishkaRoute)


@router.post("/threads/{thread_id}/like", response_model=ToggleThreadLikeResponse)
async def toggle_thread_like(
    thread_id: str,
    toggle_thread_like_use_case: FromDishka[ToggleThreadLikeUseCase],
    auth_guard: FromDishka[AuthGuard],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ToggleThreadLikeResponse:
    """Like a thread, or remove the caller's like if it exists."""
    user_id = auth_guard.require(request_token(auth_token, authorization))
    use_case_request = ToggleThreadLikeRequest(thread_id=thread_id, user_id=str(user_id))
    return await toggle_thread_like_use_case.execute(use_case_request)
