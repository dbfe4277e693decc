"""In-memory profile directory for testing."""

from typing import Sequence

from board.domain.model.profile import Profile
from board.domain.service.profile_directory import ProfileDirectory
from board.domain.value import UserId

from .store import InMemoryStore


class InMemoryProfileDirectory(ProfileDirectory):
    """Profile directory backed by the in-memory store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.calls: list[list[UserId]] = []

    def add(self, profile: Profile) -> Profile:
        """Register a profile (test setup helper)."""
        self.store.profiles[profile.user_id] = profile
        return profile

    async def resolve_display_names(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, Profile]:
        """Look up display profiles for a batch of users."""
        self.calls.append(list(user_ids))
        return {
            uid: self.store.profiles[uid] for uid in user_ids if uid in self.store.profiles
        }
