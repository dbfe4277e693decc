"""Author display profile."""

from typing import Optional

from board.domain.model.common import DomainModel
from board.domain.value import UserId


class Profile(DomainModel):
    """Display metadata for a comment author."""

    user_id: Optional[UserId] = None
    name: str
    avatar_url: Optional[str] = None
