"""Unit tests for ThreadService."""

import asyncio
from uuid import uuid4

import pytest

from board.domain.error import NotFoundError
from board.domain.model import Profile
from board.domain.repository import LikeRepository, ThreadRepository
from board.domain.service import NotificationGateway, ProfileDirectory, ThreadService
from board.domain.value import LikeTargetType, NotificationKind, ThreadId
from board.util.tasks import BackgroundTaskDispatcher
from tests.conftest import make_thread, new_user_id
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed_thread(env, **kwargs):
    thread_repo = await env.get(ThreadRepository)
    return await thread_repo.save(make_thread(**kwargs))


class TestToggleThreadLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        thread_repo = await unit_env.get(ThreadRepository)
        like_repo = await unit_env.get(LikeRepository)
        thread = await seed_thread(unit_env)
        liker = new_user_id()

        # Act
        liked = await thread_service.toggle_like(thread.id, liker)
        stored_like = await like_repo.find_by_user_and_target(
            liker, LikeTargetType.THREAD, thread.id
        )
        unliked = await thread_service.toggle_like(thread.id, liker)

        # Assert
        assert (liked.is_liked, liked.likes_count) == (True, 1)
        assert stored_like is not None
        assert (unliked.is_liked, unliked.likes_count) == (False, 0)
        assert (await thread_repo.find_by_id(thread.id)).likes_count == 0
        assert (
            await like_repo.find_by_user_and_target(
                liker, LikeTargetType.THREAD, thread.id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_unknown_thread_raises_not_found(self, unit_env):
        thread_service = await unit_env.get(ThreadService)

        with pytest.raises(NotFoundError):
            await thread_service.toggle_like(ThreadId(uuid4()), new_user_id())

    @pytest.mark.asyncio
    async def test_counter_drift_never_goes_negative(self, unit_env):
        # Arrange - a like exists but the cached counter says 0
        thread_service = await unit_env.get(ThreadService)
        thread = await seed_thread(unit_env)
        liker = new_user_id()
        await thread_service.toggle_like(thread.id, liker)
        thread_repo = await unit_env.get(ThreadRepository)
        drifted = (await thread_repo.find_by_id(thread.id)).model_copy(
            update={"likes_count": 0}
        )
        await thread_repo.save(drifted)

        # Act
        result = await thread_service.toggle_like(thread.id, liker)

        # Assert
        assert (result.is_liked, result.likes_count) == (False, 0)

    @pytest.mark.asyncio
    async def test_like_notifies_thread_author(self, unit_env):
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        directory = await unit_env.get(ProfileDirectory)
        gateway = await unit_env.get(NotificationGateway)
        dispatcher = await unit_env.get(BackgroundTaskDispatcher)
        thread = await seed_thread(unit_env, title="River cleanup")
        liker = new_user_id()
        directory.add(Profile(user_id=liker, name="Grace"))

        # Act
        await thread_service.toggle_like(thread.id, liker)
        await thread_service.toggle_like(thread.id, liker)
        await dispatcher.drain()

        # Assert - the unlike sends nothing
        (sent,) = gateway.sent_to(thread.author_id)
        assert sent.kind == NotificationKind.THREAD_LIKE
        assert sent.payload["message"] == 'Grace liked "River cleanup".'

    @pytest.mark.asyncio
    async def test_concurrent_likes_keep_counter_exact(self, unit_env):
        thread_service = await unit_env.get(ThreadService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await seed_thread(unit_env)

        await asyncio.gather(
            *(thread_service.toggle_like(thread.id, new_user_id()) for _ in range(12))
        )

        assert (await thread_repo.find_by_id(thread.id)).likes_count == 12
