"""PostgreSQL implementation of the commented-threads repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import CommentedThread
from board.domain.repository import CommentedThreadRepository
from board.domain.value import ThreadId, UserId
from board.persistence.mappers import row_to_commented_thread
from board.persistence.tables import commented_threads_table


class PostgresCommentedThreadRepository(CommentedThreadRepository):
    """PostgreSQL implementation of CommentedThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, user_id: UserId, thread_id: ThreadId
    ) -> Optional[CommentedThread]:
        """Find the entry for a user and thread."""
        stmt = select(commented_threads_table).where(
            commented_threads_table.c.user_id == user_id,
            commented_threads_table.c.thread_id == thread_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_commented_thread(row._asdict()) if row else None

    async def find_by_user(self, user_id: UserId) -> List[CommentedThread]:
        """Find every thread a user has commented on, most recent first."""
        stmt = (
            select(commented_threads_table)
            .where(commented_threads_table.c.user_id == user_id)
            .order_by(commented_threads_table.c.last_commented_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_commented_thread(row._asdict()) for row in result.fetchall()]

    async def upsert(self, entry: CommentedThread) -> CommentedThread:
        """Create the entry or refresh its last_commented_at."""
        stmt = insert(commented_threads_table).values(
            user_id=entry.user_id,
            thread_id=entry.thread_id,
            last_commented_at=entry.last_commented_at,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="pk_commented_threads",
            set_={"last_commented_at": stmt.excluded.last_commented_at},
        ).returning(commented_threads_table)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_commented_thread(row._asdict())

    async def delete(self, user_id: UserId, thread_id: ThreadId) -> None:
        """Remove the entry for a user and thread, if present."""
        stmt = commented_threads_table.delete().where(
            commented_threads_table.c.user_id == user_id,
            commented_threads_table.c.thread_id == thread_id,
        )
        await self.session.execute(stmt)
