"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import exists, func, select, tuple_
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.error import NotFoundError
from board.domain.model import Comment
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, PageCursor, ThreadId, UserId
from board.persistence.mappers import comment_to_dict, row_to_comment
from board.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_roots(
        self,
        thread_id: ThreadId,
        after: Optional[PageCursor] = None,
        limit: int = 10,
    ) -> List[Comment]:
        """Find root comments of a thread after a cursor position."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.thread_id == thread_id)
            .where(comments_table.c.parent_id.is_(None))
        )
        if after is not None:
            stmt = stmt.where(
                tuple_(comments_table.c.created_at, comments_table.c.id)
                > tuple_(after.created_at, after.comment_id)
            )
        stmt = stmt.order_by(
            comments_table.c.created_at, comments_table.c.id
        ).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_ids: Sequence[CommentId]) -> List[Comment]:
        """Find direct replies of any of the given comments."""
        if not parent_ids:
            return []
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.in_(list(parent_ids)))
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies(self, thread_id: ThreadId) -> List[Comment]:
        """Find every reply of a thread."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.thread_id == thread_id)
            .where(comments_table.c.parent_id.is_not(None))
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def has_live_children(self, comment_id: CommentId) -> bool:
        """Check whether a comment has a non-deleted direct reply."""
        stmt = select(
            exists()
            .where(comments_table.c.parent_id == comment_id)
            .where(comments_table.c.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def count_by_author_in_thread(
        self, author_id: UserId, thread_id: ThreadId
    ) -> int:
        """Count the comments an author still owns on a thread."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.thread_id == thread_id)
            .where(comments_table.c.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            # parent_id, thread_id and created_at never change after insert
            values = {
                k: v
                for k, v in comment_dict.items()
                if k not in {"id", "thread_id", "parent_id", "depth", "created_at"}
            }
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**values)
                .returning(comments_table)
            )
        else:
            # created_at is assigned by the database clock
            values = {k: v for k, v in comment_dict.items() if k != "created_at"}
            stmt = comments_table.insert().values(**values).returning(comments_table)

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> None:
        """Physically remove a comment."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_likes_count(self, comment_id: CommentId, delta: int) -> int:
        """Move a comment's like counter, never below zero."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(
                likes_count=func.greatest(0, comments_table.c.likes_count + delta)
            )
            .returning(comments_table.c.likes_count)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one_or_none()
        if count is None:
            raise NotFoundError("Comment", str(comment_id))
        return count
