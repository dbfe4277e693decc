"""Like entity.

A like's existence is the source of truth for ``is_liked``; ``likes_count``
on the liked entity is a cache kept in lock-step by the counter ledger.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from board.domain.model.common import DomainModel, utc_now
from board.domain.value import LikeId, LikeTargetType, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per target (enforced by a unique constraint)
    - Polymorphic reference to the target (comment or thread)
    """

    id: LikeId
    user_id: UserId
    target_type: LikeTargetType
    target_id: UUID  # CommentId or ThreadId (both are UUIDs)
    created_at: datetime = Field(default_factory=utc_now)


class LikeToggleResult(DomainModel):
    """State after a like toggle."""

    is_liked: bool
    likes_count: int = Field(ge=0)
