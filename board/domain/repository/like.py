"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from board.domain.model.like import Like
from board.domain.value import LikeId, LikeTargetType, UserId


class LikeRepository(ABC):
    """Repository for Like entity.

    At most one like exists per (user_id, target_type, target_id).
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target.

        Args:
            user_id: The user's ID
            target_type: Type of target (comment or thread)
            target_id: ID of the target

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_liked_target_ids(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find which of the given targets a user has liked (batch query).

        Args:
            user_id: The user's ID
            target_type: Type of the targets
            target_ids: Target IDs to check

        Returns:
            Subset of ``target_ids`` the user has liked
        """
        pass

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Create a like.

        Args:
            like: The like to save

        Returns:
            The saved like

        Raises:
            ConflictError: If the user already likes the target
        """
        pass

    @abstractmethod
    async def delete(self, like_id: LikeId) -> None:
        """Delete a like.

        Args:
            like_id: The like ID to delete
        """
        pass
