"""PostgreSQL implementation of Thread repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.error import NotFoundError
from board.domain.model import Thread
from board.domain.repository import ThreadRepository
from board.domain.value import ThreadId
from board.persistence.mappers import row_to_thread, thread_to_dict
from board.persistence.tables import threads_table


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        stmt = select(threads_table).where(threads_table.c.id == thread_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_thread(row._asdict()) if row else None

    async def save(self, thread: Thread) -> Thread:
        """Save a thread (create or update).

        comments_count is left alone on update; only the counter methods
        move it.
        """
        thread_dict = thread_to_dict(thread)
        stmt = insert(threads_table).values(**thread_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[threads_table.c.id],
            set_={
                "kind": stmt.excluded.kind,
                "title": stmt.excluded.title,
                "likes_count": stmt.excluded.likes_count,
                "is_locked": stmt.excluded.is_locked,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(threads_table)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_thread(row._asdict())

    async def increment_comments_count(self, thread_id: ThreadId, delta: int) -> int:
        """Move a thread's comment counter, never below zero."""
        stmt = (
            threads_table.update()
            .where(threads_table.c.id == thread_id)
            .values(
                comments_count=func.greatest(
                    0, threads_table.c.comments_count + delta
                )
            )
            .returning(threads_table.c.comments_count)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one_or_none()
        if count is None:
            raise NotFoundError("Thread", str(thread_id))
        return count

    async def increment_likes_count(self, thread_id: ThreadId, delta: int) -> int:
        """Move a thread's like counter, never below zero."""
        stmt = (
            threads_table.update()
            .where(threads_table.c.id == thread_id)
            .values(
                likes_count=func.greatest(0, threads_table.c.likes_count + delta)
            )
            .returning(threads_table.c.likes_count)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one_or_none()
        if count is None:
            raise NotFoundError("Thread", str(thread_id))
        return count
