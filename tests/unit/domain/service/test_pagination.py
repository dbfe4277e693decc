"""Unit tests for PaginationEngine."""

import pytest

from board.config import CommentSettings
from board.domain.error import ValidationError
from board.domain.model import Comment, Thread
from board.domain.service import PaginationEngine, ThreadResolver
from board.domain.value import ThreadKind
from board.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryStore,
)
from tests.conftest import make_comment, make_thread


def build_engine(store: InMemoryStore, **settings) -> PaginationEngine:
    repository = InMemoryCommentRepository(store)
    return PaginationEngine(
        comment_repository=repository,
        thread_resolver=ThreadResolver(repository),
        settings=CommentSettings(**settings),
    )


def seed_roots(store: InMemoryStore, thread: Thread, count: int) -> list[Comment]:
    roots = [make_comment(thread.id, minutes=i) for i in range(count)]
    for root in roots:
        store.comments[root.id] = root
    return roots


async def read_all_pages(engine: PaginationEngine, thread: Thread, page_size: int):
    pages = []
    cursor = None
    while True:
        page = await engine.fetch_page(thread, cursor=cursor, page_size=page_size)
        pages.append(page)
        if not page.has_next:
            return pages
        cursor = page.next_cursor


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def thread() -> Thread:
    return make_thread(kind=ThreadKind.COMMUNITY)


class TestFetchPage:
    """Tests for cursor paging over root comments."""

    @pytest.mark.asyncio
    async def test_pages_cover_every_root_exactly_once_in_order(self, store, thread):
        # Arrange
        roots = seed_roots(store, thread, 25)
        engine = build_engine(store)

        # Act
        pages = await read_all_pages(engine, thread, page_size=10)

        # Assert
        assert [len(p.roots) for p in pages] == [10, 10, 5]
        assert [p.has_next for p in pages] == [True, True, False]
        seen = [r.id for p in pages for r in p.roots]
        assert seen == [r.id for r in roots]
        assert pages[-1].next_cursor is None

    @pytest.mark.asyncio
    async def test_exactly_one_full_page_has_no_next(self, store, thread):
        seed_roots(store, thread, 10)
        engine = build_engine(store)

        page = await engine.fetch_page(thread, page_size=10)

        assert len(page.roots) == 10
        assert page.has_next is False
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_empty_thread(self, store, thread):
        engine = build_engine(store)

        page = await engine.fetch_page(thread)

        assert page.roots == []
        assert page.has_next is False
        assert page.replies == {}

    @pytest.mark.asyncio
    async def test_roots_added_while_paging_are_not_duplicated(self, store, thread):
        # Arrange
        roots = seed_roots(store, thread, 6)
        engine = build_engine(store)
        first = await engine.fetch_page(thread, page_size=3)

        # Act - a newer root arrives between page requests
        newcomer = make_comment(thread.id, minutes=60)
        store.comments[newcomer.id] = newcomer
        rest = await read_all_pages(engine, thread, page_size=3)
        second = await engine.fetch_page(thread, cursor=first.next_cursor, page_size=3)

        # Assert
        assert [r.id for r in second.roots] == [r.id for r in roots[3:6]]
        seen = [r.id for r in first.roots] + [r.id for r in second.roots]
        assert len(seen) == len(set(seen))
        assert newcomer.id in [r.id for p in rest for r in p.roots]

    @pytest.mark.asyncio
    async def test_cursor_survives_removal_of_the_last_root(self, store, thread):
        # Arrange
        roots = seed_roots(store, thread, 4)
        engine = build_engine(store)
        first = await engine.fetch_page(thread, page_size=2)

        # Act - the comment the cursor points at is hard deleted
        del store.comments[roots[1].id]
        second = await engine.fetch_page(thread, cursor=first.next_cursor, page_size=2)

        # Assert
        assert [r.id for r in second.roots] == [roots[2].id, roots[3].id]

    @pytest.mark.asyncio
    async def test_oversized_page_is_clamped(self, store, thread):
        seed_roots(store, thread, 30)
        engine = build_engine(store, max_roots_per_page=10)

        page = await engine.fetch_page(thread, page_size=50)

        assert page.page_size == 10
        assert len(page.roots) == 10
        assert page.has_next is True

    @pytest.mark.asyncio
    async def test_default_page_size_applies(self, store, thread):
        seed_roots(store, thread, 8)
        engine = build_engine(store, default_page_size=5)

        page = await engine.fetch_page(thread)

        assert page.page_size == 5
        assert len(page.roots) == 5

    @pytest.mark.asyncio
    async def test_page_size_below_one_is_rejected(self, store, thread):
        engine = build_engine(store)

        with pytest.raises(ValidationError):
            await engine.fetch_page(thread, page_size=0)

    @pytest.mark.asyncio
    async def test_malformed_cursor_is_rejected(self, store, thread):
        seed_roots(store, thread, 3)
        engine = build_engine(store)

        with pytest.raises(ValidationError, match="Invalid cursor"):
            await engine.fetch_page(thread, cursor="definitely not a cursor")

    @pytest.mark.asyncio
    async def test_replies_are_truncated_but_counted(self, store, thread):
        # Arrange
        (root,) = seed_roots(store, thread, 1)
        for i in range(4):
            reply = make_comment(thread.id, parent=root, minutes=10 + i)
            store.comments[reply.id] = reply
        engine = build_engine(store, replies_preview_limit=2)

        # Act
        page = await engine.fetch_page(thread)

        # Assert
        assert len(page.replies[root.id]) == 2
        assert page.replies_count[root.id] == 4

    @pytest.mark.asyncio
    async def test_replies_never_count_as_roots(self, store, thread):
        # Arrange
        roots = seed_roots(store, thread, 2)
        reply = make_comment(thread.id, parent=roots[0], minutes=30)
        store.comments[reply.id] = reply
        engine = build_engine(store)

        # Act
        page = await engine.fetch_page(thread)

        # Assert
        assert [r.id for r in page.roots] == [r.id for r in roots]
        assert [r.id for r in page.replies[roots[0].id]] == [reply.id]
