"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from board.domain.model import Comment, CommentedThread, Like, Profile, Thread
from board.domain.value import (
    CommentId,
    LikeId,
    LikeTargetType,
    ThreadId,
    ThreadKind,
    UserId,
)


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return value if isinstance(value, UUID) else UUID(str(value))


def row_to_thread(row: Dict[str, Any]) -> Thread:
    """Convert database row to Thread domain model."""
    return Thread(
        id=ThreadId(_uuid(row["id"])),
        kind=ThreadKind(row["kind"]),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        comments_count=row["comments_count"],
        likes_count=row["likes_count"],
        is_locked=row["is_locked"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def thread_to_dict(thread: Thread) -> Dict[str, Any]:
    """Convert Thread domain model to database dict."""
    return {
        "id": thread.id,
        "kind": thread.kind.value,
        "author_id": thread.author_id,
        "title": thread.title,
        "comments_count": thread.comments_count,
        "likes_count": thread.likes_count,
        "is_locked": thread.is_locked,
        "created_at": thread.created_at,
        "updated_at": thread.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _uuid(row.get("parent_id"))
    author_id = _uuid(row.get("author_id"))
    parent_author_id = _uuid(row.get("parent_author_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        parent_id=CommentId(parent_id) if parent_id else None,
        depth=row["depth"],
        author_id=UserId(author_id) if author_id else None,
        author_name=row.get("author_name"),
        parent_author_id=UserId(parent_author_id) if parent_author_id else None,
        content=row["content"],
        likes_count=row["likes_count"],
        reports_count=row["reports_count"],
        is_deleted=row["is_deleted"],
        is_locked=row["is_locked"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": comment.id,
        "thread_id": comment.thread_id,
        "parent_id": comment.parent_id,
        "depth": comment.depth,
        "author_id": comment.author_id,
        "author_name": comment.author_name,
        "parent_author_id": comment.parent_author_id,
        "content": comment.content,
        "likes_count": comment.likes_count,
        "reports_count": comment.reports_count,
        "is_deleted": comment.is_deleted,
        "is_locked": comment.is_locked,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model."""
    return Like(
        id=LikeId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        target_type=LikeTargetType(row["target_type"]),
        target_id=_uuid(row["target_id"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    return {
        "id": like.id,
        "user_id": like.user_id,
        "target_type": like.target_type.value,
        "target_id": like.target_id,
        "created_at": like.created_at,
    }


def row_to_commented_thread(row: Dict[str, Any]) -> CommentedThread:
    """Convert database row to CommentedThread domain model."""
    return CommentedThread(
        user_id=UserId(_uuid(row["user_id"])),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        last_commented_at=row["last_commented_at"],
    )


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        user_id=UserId(_uuid(row["user_id"])),
        name=row["name"],
        avatar_url=row.get("avatar_url"),
    )
