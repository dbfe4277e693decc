"""Unit tests for the comment use cases."""

import pytest

from board.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    ToggleLikeRequest,
    ToggleLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from board.domain.error import NotFoundError, ValidationError
from board.domain.repository import ThreadRepository
from board.domain.value import DeletionOutcome
from tests.conftest import make_thread, new_user_id
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def seed_thread(env):
    thread_repo = await env.get(ThreadRepository)
    return await thread_repo.save(make_thread())


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_returns_created_comment(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        thread = await seed_thread(unit_env)
        author_id = str(new_user_id())

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                thread_id=str(thread.id), author_id=author_id, content="hello"
            )
        )

        # Assert
        assert response.thread_id == str(thread.id)
        assert response.author_id == author_id
        assert response.depth == 0
        assert response.parent_id is None
        assert response.is_deleted is False

    @pytest.mark.asyncio
    async def test_malformed_thread_id_is_not_found(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    thread_id="not-a-uuid",
                    author_id=str(new_user_id()),
                    content="hello",
                )
            )

    @pytest.mark.asyncio
    async def test_malformed_author_id_is_invalid(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        thread = await seed_thread(unit_env)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    thread_id=str(thread.id), author_id="bob", content="hello"
                )
            )


class TestCommentLifecycleUseCases:
    """Edit, like, list and delete through the application layer."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        update = await unit_env.get(UpdateCommentUseCase)
        toggle = await unit_env.get(ToggleLikeUseCase)
        listing = await unit_env.get(ListCommentsUseCase)
        delete = await unit_env.get(DeleteCommentUseCase)
        thread = await seed_thread(unit_env)
        author_id = str(new_user_id())
        viewer_id = str(new_user_id())

        created = await create.execute(
            CreateCommentRequest(
                thread_id=str(thread.id), author_id=author_id, content="v1"
            )
        )
        reply = await create.execute(
            CreateCommentRequest(
                thread_id=str(thread.id),
                author_id=viewer_id,
                content="a reply",
                parent_id=created.comment_id,
            )
        )

        # Act
        edited = await update.execute(
            UpdateCommentRequest(
                comment_id=created.comment_id, user_id=author_id, content="v2"
            )
        )
        liked = await toggle.execute(
            ToggleLikeRequest(comment_id=created.comment_id, user_id=viewer_id)
        )
        page = await listing.execute(
            ListCommentsRequest(thread_id=str(thread.id), viewer_id=viewer_id)
        )
        deleted = await delete.execute(
            DeleteCommentRequest(comment_id=reply.comment_id, user_id=viewer_id)
        )

        # Assert
        assert edited.content == "v2"
        assert liked.is_liked is True
        assert liked.likes_count == 1
        (item,) = page.comments
        assert item.comment_id == created.comment_id
        assert item.is_liked is True
        assert item.is_mine is False
        assert [r.comment_id for r in item.replies] == [reply.comment_id]
        assert item.replies[0].is_mine is True
        assert page.page_info.has_next is False
        assert deleted.outcome == DeletionOutcome.HARD_DELETED

    @pytest.mark.asyncio
    async def test_list_unknown_thread_is_not_found(self, unit_env):
        listing = await unit_env.get(ListCommentsUseCase)

        with pytest.raises(NotFoundError):
            await listing.execute(ListCommentsRequest(thread_id="missing"))
