"""Unit tests for CommentService."""

import asyncio
from uuid import uuid4

import pytest

from board.domain.error import ForbiddenError, NotFoundError, ValidationError
from board.domain.model import Profile
from board.domain.repository import (
    CommentedThreadRepository,
    CommentRepository,
    LikeRepository,
    ThreadRepository,
)
from board.domain.service import CommentService, ProfileDirectory
from board.domain.value import (
    CommentId,
    DeletionOutcome,
    LikeTargetType,
    ThreadId,
    ThreadKind,
)
from tests.conftest import make_thread, new_user_id
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def seed_thread(env, **kwargs):
    thread_repo = await env.get(ThreadRepository)
    return await thread_repo.save(make_thread(**kwargs))


async def comments_count(env, thread_id: ThreadId) -> int:
    thread_repo = await env.get(ThreadRepository)
    thread = await thread_repo.find_by_id(thread_id)
    return thread.comments_count


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_root_comment(self, unit_env):
        """Root comment should have depth 0 and bump the thread counter."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()

        # Act
        result = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="<p>First!</p>"
        )

        # Assert
        assert result.depth == 0
        assert result.parent_id is None
        assert result.author_id == author_id
        assert result.content == "<p>First!</p>"
        assert await comment_repo.find_by_id(result.id) is not None
        assert await comments_count(unit_env, thread.id) == 1

    @pytest.mark.asyncio
    async def test_reply_records_parent_and_depth(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        parent_author = new_user_id()
        parent = await comment_service.create_comment(
            thread_id=thread.id, author_id=parent_author, content="parent"
        )

        # Act
        reply = await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content="reply",
            parent_id=parent.id,
        )

        # Assert
        assert reply.depth == 1
        assert reply.parent_id == parent.id
        assert reply.parent_author_id == parent_author
        assert await comments_count(unit_env, thread.id) == 2

    @pytest.mark.asyncio
    async def test_author_name_is_captured_from_profile(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        directory = await unit_env.get(ProfileDirectory)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        directory.add(Profile(user_id=author_id, name="Marie"))

        # Act
        result = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="hi"
        )

        # Assert
        assert result.author_name == "Marie"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", [ThreadKind.COMMUNITY, ThreadKind.MISSION])
    async def test_reply_to_reply_is_grouped_under_its_root(self, unit_env, kind):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env, kind=kind)
        a = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="A"
        )
        b = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="B", parent_id=a.id
        )

        # Act
        c = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="C", parent_id=b.id
        )
        listing = await comment_service.list_comments(thread.id)

        # Assert
        assert (a.depth, b.depth, c.depth) == (0, 1, 2)
        assert [view.comment.id for view in listing.roots] == [a.id]
        root = listing.roots[0]
        assert [view.comment.id for view in root.replies] == [b.id, c.id]
        assert root.replies_count == 2
        assert await comments_count(unit_env, thread.id) == 3

    @pytest.mark.asyncio
    async def test_mission_thread_accepts_deep_replies(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env, kind=ThreadKind.MISSION)
        parent = None
        for _ in range(4):
            parent = await comment_service.create_comment(
                thread_id=thread.id,
                author_id=new_user_id(),
                content="nested",
                parent_id=parent.id if parent else None,
            )

        # Assert
        assert parent.depth == 3

    @pytest.mark.asyncio
    async def test_unknown_thread_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                thread_id=ThreadId(uuid4()), author_id=new_user_id(), content="hi"
            )

    @pytest.mark.asyncio
    async def test_unknown_parent_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                thread_id=thread.id,
                author_id=new_user_id(),
                content="hi",
                parent_id=CommentId(uuid4()),
            )
        assert await comments_count(unit_env, thread.id) == 0

    @pytest.mark.asyncio
    async def test_parent_from_another_thread_is_rejected(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        other = await seed_thread(unit_env)
        foreign = await comment_service.create_comment(
            thread_id=other.id, author_id=new_user_id(), content="elsewhere"
        )

        # Act & Assert
        with pytest.raises(ValidationError, match="does not belong"):
            await comment_service.create_comment(
                thread_id=thread.id,
                author_id=new_user_id(),
                content="hi",
                parent_id=foreign.id,
            )

    @pytest.mark.asyncio
    async def test_locked_thread_rejects_comments(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env, is_locked=True)

        with pytest.raises(ValidationError, match="locked"):
            await comment_service.create_comment(
                thread_id=thread.id, author_id=new_user_id(), content="hi"
            )

    @pytest.mark.asyncio
    async def test_locked_parent_rejects_replies(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="root"
        )
        await comment_repo.save(root.model_copy(update={"is_locked": True}))

        # Act & Assert
        with pytest.raises(ValidationError, match="locked"):
            await comment_service.create_comment(
                thread_id=thread.id,
                author_id=new_user_id(),
                content="hi",
                parent_id=root.id,
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "<p> </p>", "<script></script>"])
    async def test_empty_content_is_rejected(self, unit_env, content):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)

        with pytest.raises(ValidationError, match="empty"):
            await comment_service.create_comment(
                thread_id=thread.id, author_id=new_user_id(), content=content
            )

    @pytest.mark.asyncio
    async def test_content_is_sanitized(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)

        result = await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content='<b onclick="steal()">bold</b><img src="x">',
        )

        assert result.content == "<b>bold</b>"

    @pytest.mark.asyncio
    async def test_commented_thread_entry_is_recorded(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        commented = await unit_env.get(CommentedThreadRepository)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()

        # Act
        await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="hi"
        )

        # Assert
        entries = await commented.find_by_user(author_id)
        assert [e.thread_id for e in entries] == [thread.id]


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_leaf_comment_is_hard_deleted(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="bye"
        )

        # Act
        outcome = await comment_service.delete_comment(comment.id, author_id)

        # Assert
        assert outcome == DeletionOutcome.HARD_DELETED
        assert await comment_repo.find_by_id(comment.id) is None
        assert await comments_count(unit_env, thread.id) == 0

    @pytest.mark.asyncio
    async def test_comment_with_live_reply_is_soft_deleted(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="root"
        )
        await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content="reply",
            parent_id=root.id,
        )

        # Act
        outcome = await comment_service.delete_comment(root.id, author_id)

        # Assert
        assert outcome == DeletionOutcome.SOFT_DELETED
        stored = await comment_repo.find_by_id(root.id)
        assert stored.is_deleted is True
        assert stored.author_id is None
        assert stored.content == "This comment has been deleted."
        assert stored.parent_id is None
        assert await comments_count(unit_env, thread.id) == 2

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_deleted_again(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="root"
        )
        await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content="reply",
            parent_id=root.id,
        )
        await comment_service.delete_comment(root.id, author_id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(root.id, author_id)

    @pytest.mark.asyncio
    async def test_only_author_can_delete(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="mine"
        )

        with pytest.raises(ForbiddenError):
            await comment_service.delete_comment(comment.id, new_user_id())
        assert await comments_count(unit_env, thread.id) == 1

    @pytest.mark.asyncio
    async def test_counter_tracks_creates_minus_hard_deletes(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        created = [
            await comment_service.create_comment(
                thread_id=thread.id, author_id=author_id, content=f"comment {i}"
            )
            for i in range(7)
        ]

        # Act
        for comment in created[:3]:
            await comment_service.delete_comment(comment.id, author_id)

        # Assert
        assert await comments_count(unit_env, thread.id) == 4

    @pytest.mark.asyncio
    async def test_commented_thread_entry_removed_with_last_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        commented = await unit_env.get(CommentedThreadRepository)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        first = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="one"
        )
        second = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="two"
        )

        # Act & Assert
        await comment_service.delete_comment(first.id, author_id)
        assert await commented.find(author_id, thread.id) is not None

        await comment_service.delete_comment(second.id, author_id)
        assert await commented.find(author_id, thread.id) is None

    @pytest.mark.asyncio
    async def test_unknown_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()), new_user_id())


class TestUpdateComment:
    """Tests for update_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="draft"
        )

        # Act
        updated = await comment_service.update_comment(
            comment.id, author_id, "<i>final</i>"
        )

        # Assert
        assert updated.content == "<i>final</i>"
        assert updated.created_at == comment.created_at
        assert updated.updated_at >= comment.updated_at

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="draft"
        )

        with pytest.raises(ForbiddenError):
            await comment_service.update_comment(comment.id, new_user_id(), "hijack")

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_edited(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="root"
        )
        await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content="reply",
            parent_id=root.id,
        )
        await comment_service.delete_comment(root.id, author_id)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.update_comment(root.id, author_id, "revived")


class TestToggleLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="like me"
        )
        liker = new_user_id()

        # Act
        liked = await comment_service.toggle_like(comment.id, liker)
        unliked = await comment_service.toggle_like(comment.id, liker)

        # Assert
        assert (liked.is_liked, liked.likes_count) == (True, 1)
        assert (unliked.is_liked, unliked.likes_count) == (False, 0)
        assert (await comment_repo.find_by_id(comment.id)).likes_count == 0

    @pytest.mark.asyncio
    async def test_likes_from_different_users_accumulate(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="popular"
        )

        results = [
            await comment_service.toggle_like(comment.id, new_user_id())
            for _ in range(3)
        ]

        assert [r.likes_count for r in results] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_counter_drift_never_goes_negative(self, unit_env):
        # Arrange - a like exists but the cached counter says 0
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="drift"
        )
        liker = new_user_id()
        await comment_service.toggle_like(comment.id, liker)
        stored = await comment_repo.find_by_id(comment.id)
        await comment_repo.save(stored.model_copy(update={"likes_count": 0}))

        # Act
        result = await comment_service.toggle_like(comment.id, liker)

        # Assert
        assert result.is_liked is False
        assert result.likes_count == 0

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_liked(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        author_id = new_user_id()
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="root"
        )
        await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content="reply",
            parent_id=root.id,
        )
        await comment_service.delete_comment(root.id, author_id)

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.toggle_like(root.id, new_user_id())


class TestListComments:
    """Tests for list_comments method."""

    @pytest.mark.asyncio
    async def test_viewer_flags_and_reply_grouping(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        directory = await unit_env.get(ProfileDirectory)
        op = new_user_id()
        viewer = new_user_id()
        directory.add(Profile(user_id=op, name="Original Poster"))
        thread = await seed_thread(unit_env, author_id=op)
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=viewer, content="question"
        )
        answer = await comment_service.create_comment(
            thread_id=thread.id, author_id=op, content="answer", parent_id=root.id
        )
        await comment_service.toggle_like(answer.id, viewer)

        # Act
        listing = await comment_service.list_comments(thread.id, viewer_id=viewer)

        # Assert
        assert len(listing.roots) == 1
        root_view = listing.roots[0]
        assert root_view.comment.id == root.id
        assert root_view.is_mine is True
        assert root_view.is_thread_author is False
        assert root_view.replies_count == 1
        reply_view = root_view.replies[0]
        assert reply_view.comment.id == answer.id
        assert reply_view.is_liked is True
        assert reply_view.is_mine is False
        assert reply_view.is_thread_author is True
        assert reply_view.author.name == "Original Poster"

    @pytest.mark.asyncio
    async def test_anonymous_viewer_gets_no_personal_flags(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        comment = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="hi"
        )
        await comment_service.toggle_like(comment.id, new_user_id())

        listing = await comment_service.list_comments(thread.id)

        view = listing.roots[0]
        assert view.is_liked is False
        assert view.is_mine is False
        assert view.comment.likes_count == 1

    @pytest.mark.asyncio
    async def test_soft_deleted_comment_shows_unknown_author(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        directory = await unit_env.get(ProfileDirectory)
        author_id = new_user_id()
        directory.add(Profile(user_id=author_id, name="Ada"))
        thread = await seed_thread(unit_env)
        root = await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="root"
        )
        await comment_service.create_comment(
            thread_id=thread.id,
            author_id=new_user_id(),
            content="reply",
            parent_id=root.id,
        )
        await comment_service.delete_comment(root.id, author_id)

        # Act
        listing = await comment_service.list_comments(thread.id, viewer_id=author_id)

        # Assert
        view = listing.roots[0]
        assert view.comment.is_deleted is True
        assert view.author.name == "unknown"
        assert view.is_mine is False
        assert view.replies_count == 1

    @pytest.mark.asyncio
    async def test_profile_lookup_failure_degrades_to_stored_name(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        directory = await unit_env.get(ProfileDirectory)
        author_id = new_user_id()
        directory.add(Profile(user_id=author_id, name="Grace"))
        thread = await seed_thread(unit_env)
        await comment_service.create_comment(
            thread_id=thread.id, author_id=author_id, content="hi"
        )

        async def broken(user_ids):
            raise RuntimeError("directory down")

        directory.resolve_display_names = broken

        # Act
        listing = await comment_service.list_comments(thread.id)

        # Assert
        assert listing.roots[0].author.name == "Grace"

    @pytest.mark.asyncio
    async def test_pages_through_roots_with_cursor(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(unit_env)
        created = [
            await comment_service.create_comment(
                thread_id=thread.id, author_id=new_user_id(), content=f"c{i}"
            )
            for i in range(5)
        ]

        # Act
        first = await comment_service.list_comments(thread.id, page_size=3)
        second = await comment_service.list_comments(
            thread.id, cursor=first.page_info.next_cursor, page_size=3
        )

        # Assert
        assert first.page_info.has_next is True
        assert second.page_info.has_next is False
        listed = [v.comment.id for v in first.roots + second.roots]
        assert listed == [c.id for c in created]

    @pytest.mark.asyncio
    async def test_unknown_thread_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.list_comments(ThreadId(uuid4()))


class TestConcurrentWrites:
    """Counters stay exact when operations overlap."""

    @pytest.mark.asyncio
    async def test_concurrent_creates_and_likes_keep_counters_exact(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await seed_thread(unit_env)
        target = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="target"
        )
        creates = 20
        likes = 15

        # Act
        await asyncio.gather(
            *(
                comment_service.create_comment(
                    thread_id=thread.id,
                    author_id=new_user_id(),
                    content=f"reply {i}",
                    parent_id=target.id if i % 2 else None,
                )
                for i in range(creates)
            ),
            *(
                comment_service.toggle_like(target.id, new_user_id())
                for _ in range(likes)
            ),
        )

        # Assert
        assert await comments_count(unit_env, thread.id) == creates + 1
        assert (await comment_repo.find_by_id(target.id)).likes_count == likes

    @pytest.mark.asyncio
    async def test_concurrent_toggles_by_one_user_cancel_out(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)
        thread = await seed_thread(unit_env)
        target = await comment_service.create_comment(
            thread_id=thread.id, author_id=new_user_id(), content="flip"
        )
        user_id = new_user_id()

        # Act
        results = await asyncio.gather(
            *(comment_service.toggle_like(target.id, user_id) for _ in range(4))
        )

        # Assert
        assert sorted(r.is_liked for r in results) == [False, False, True, True]
        assert (await comment_repo.find_by_id(target.id)).likes_count == 0
        assert (
            await like_repo.find_by_user_and_target(
                user_id, LikeTargetType.COMMENT, target.id
            )
            is None
        )
