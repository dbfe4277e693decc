"""Author display lookups."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Optional

import logfire

from board.domain.model.profile import Profile
from board.domain.value import UserId

from .base import Service


class ProfileDirectory(ABC):
    """External source of author display names and avatars."""

    @abstractmethod
    async def resolve_display_names(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, Profile]:
        """Look up display profiles for a batch of users.

        Args:
            user_ids: Users to look up (at most the provider's batch size)

        Returns:
            Profiles keyed by user id; unknown users are simply absent
        """
        pass


class ProfileService(Service):
    """Batched, failure-tolerant display name resolution."""

    def __init__(
        self,
        profile_directory: ProfileDirectory,
        batch_size: int = 10,
        unknown_name: str = "unknown",
    ) -> None:
        """Initialize profile service.

        Args:
            profile_directory: Directory to query
            batch_size: Provider-imposed ceiling on ids per lookup
            unknown_name: Display name used for missing or unresolvable users
        """
        self.profile_directory = profile_directory
        self.batch_size = batch_size
        self.unknown_name = unknown_name

    def unknown(self, user_id: Optional[UserId] = None) -> Profile:
        """Fallback display for a user that could not be resolved."""
        return Profile(user_id=user_id, name=self.unknown_name)

    async def resolve(self, user_ids: Iterable[Optional[UserId]]) -> dict[UserId, Profile]:
        """Resolve display profiles for every distinct user id.

        Lookups are chunked by ``batch_size``. A failing chunk is logged and
        its users fall back to the unknown display.

        Args:
            user_ids: User ids, possibly repeated or None

        Returns:
            A profile for every non-None id in ``user_ids``
        """
        unique = list(dict.fromkeys(uid for uid in user_ids if uid is not None))
        with logfire.span("profile_service.resolve", users=len(unique)):
            found: dict[UserId, Profile] = {}
            for start in range(0, len(unique), self.batch_size):
                chunk = unique[start : start + self.batch_size]
                try:
                    found.update(await self.profile_directory.resolve_display_names(chunk))
                except Exception as e:
                    logfire.warn(
                        "Profile lookup failed, using fallback display",
                        users=len(chunk),
                        error=str(e),
                    )

            return {uid: found.get(uid) or self.unknown(uid) for uid in unique}
