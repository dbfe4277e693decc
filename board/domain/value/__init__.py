"""Domain value objects for board."""

from board.domain.value.cursor import PageCursor
from board.domain.value.identifiers import CommentId, LikeId, ThreadId, UserId
from board.domain.value.types import (
    DeletionOutcome,
    LikeTargetType,
    NotificationKind,
    ResolutionMode,
    ThreadKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "CommentId",
    "LikeId",
    # Types
    "DeletionOutcome",
    "LikeTargetType",
    "NotificationKind",
    "PageCursor",
    "ResolutionMode",
    "ThreadKind",
]
