"""In-memory like repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from board.domain.error import ConflictError
from board.domain.model.like import Like
from board.domain.repository.like import LikeRepository
from board.domain.value import LikeId, LikeTargetType, UserId

from .store import InMemoryStore


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target."""
        for like in self.store.likes.values():
            if (
                like.user_id == user_id
                and like.target_type == target_type
                and like.target_id == target_id
            ):
                return like
        return None

    async def find_liked_target_ids(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find which of the given targets a user has liked."""
        wanted = set(target_ids)
        return {
            like.target_id
            for like in self.store.likes.values()
            if like.user_id == user_id
            and like.target_type == target_type
            and like.target_id in wanted
        }

    async def save(self, like: Like) -> Like:
        """Create a like (unique per user and target)."""
        duplicate = await self.find_by_user_and_target(
            like.user_id, like.target_type, like.target_id
        )
        if duplicate is not None:
            raise ConflictError("Like already exists")
        self.store.likes[like.id] = like
        return like

    async def delete(self, like_id: LikeId) -> None:
        """Delete a like."""
        self.store.likes.pop(like_id, None)
