"""PostgreSQL profile directory."""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Profile
from board.domain.service.profile_directory import ProfileDirectory
from board.domain.value import UserId
from board.persistence.mappers import row_to_profile
from board.persistence.tables import profiles_table


class PostgresProfileDirectory(ProfileDirectory):
    """Reads display profiles from the ``profiles`` table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize directory with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def resolve_display_names(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, Profile]:
        """Look up display profiles for a batch of users."""
        if not user_ids:
            return {}
        stmt = select(profiles_table).where(profiles_table.c.user_id.in_(list(user_ids)))
        result = await self.session.execute(stmt)
        profiles = [row_to_profile(row._asdict()) for row in result.fetchall()]
        return {profile.user_id: profile for profile in profiles}
