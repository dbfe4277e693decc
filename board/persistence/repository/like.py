"""PostgreSQL implementation of Like repository."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.error import ConflictError
from board.domain.model import Like
from board.domain.repository import LikeRepository
from board.domain.value import LikeId, LikeTargetType, UserId
from board.persistence.mappers import like_to_dict, row_to_like
from board.persistence.tables import likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target."""
        stmt = select(likes_table).where(
            likes_table.c.user_id == user_id,
            likes_table.c.target_type == target_type.value,
            likes_table.c.target_id == target_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def find_liked_target_ids(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find which of the given targets a user has liked."""
        if not target_ids:
            return set()
        stmt = select(likes_table.c.target_id).where(
            likes_table.c.user_id == user_id,
            likes_table.c.target_type == target_type.value,
            likes_table.c.target_id.in_(list(target_ids)),
        )
        result = await self.session.execute(stmt)
        return {row.target_id for row in result.fetchall()}

    async def save(self, like: Like) -> Like:
        """Create a like.

        Raises:
            ConflictError: If the user already likes the target. The
                enclosing transaction is unusable afterwards and is retried.
        """
        stmt = likes_table.insert().values(**like_to_dict(like))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError("Like already exists") from e
        return like

    async def delete(self, like_id: LikeId) -> None:
        """Delete a like."""
        stmt = likes_table.delete().where(likes_table.c.id == like_id)
        await self.session.execute(stmt)
        await self.session.flush()
