"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from board.application.usecase.comment import (
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from board.domain.service import AuthGuard
from board.interface.api.token import request_token

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str = Field(min_length=1, max_length=10000)


@router.get("/threads/{thread_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    thread_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    auth_guard: FromDishka[AuthGuard],
    cursor: str | None = None,
    page_size: int | None = None,
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListCommentsResponse:
    """List a page of root comments with their replies.

    Authentication is optional; when present, like and ownership flags are
    filled in for the viewer.

    Args:
        thread_id: Thread UUID
        list_comments_use_case: List comments use case from DI
        auth_guard: Token verification (injected)
        cursor: ``next_cursor`` of the previous page
        page_size: Root comments per page
        auth_token: JWT token from cookie
        authorization: Bearer token header

    Returns:
        One page of comments
    """
    viewer_id = auth_guard.identify(request_token(auth_token, authorization))
    request = ListCommentsRequest(
        thread_id=thread_id,
        viewer_id=str(viewer_id) if viewer_id else None,
        cursor=cursor,
        page_size=page_size,
    )
    return await list_comments_use_case.execute(request)


@router.post(
    "/threads/{thread_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    thread_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_guard: FromDishka[AuthGuard],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CommentResponse:
    """Create a comment on a thread or reply to another comment.

    Requires authentication.
    """
    user_id = auth_guard.require(request_token(auth_token, authorization))
    use_case_request = CreateCommentRequest(
        thread_id=thread_id,
        author_id=str(user_id),
        content=request.content,
        parent_id=request.parent_id,
    )
    return await create_comment_use_case.execute(use_case_request)


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    auth_guard: FromDishka[AuthGuard],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CommentResponse:
    """Edit a comment's content. Only the author can edit."""
    user_id = auth_guard.require(request_token(auth_token, authorization))
    use_case_request = UpdateCommentRequest(
        comment_id=comment_id,
        user_id=str(user_id),
        content=request.content,
    )
    return await update_comment_use_case.execute(use_case_request)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    auth_guard: FromDishka[AuthGuard],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete a comment. Only the author can delete.

    Comments with live replies are anonymized in place instead of removed.
    """
    user_id = auth_guard.require(request_token(auth_token, authorization))
    use_case_request = DeleteCommentRequest(comment_id=comment_id, user_id=str(user_id))
    return await delete_comment_use_case.execute(use_case_request)


@router.post("/comments/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    auth_guard: FromDishka[AuthGuard],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or remove the caller's like if it exists."""
    user_id = auth_guard.require(request_token(auth_token, authorization))
    use_case_request = ToggleLikeRequest(comment_id=comment_id, user_id=str(user_id))
    return await toggle_like_use_case.execute(use_case_request)
