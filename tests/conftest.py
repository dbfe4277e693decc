"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import logfire
import pytest

from board.config import AuthSettings
from board.domain.model import Comment, Thread
from board.domain.value import CommentId, ThreadId, ThreadKind, UserId
from board.util.jwt import create_token

# Keep test output free of telemetry
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def new_user_id() -> UserId:
    """Fresh random user id."""
    return UserId(uuid4())


def make_thread(
    kind: ThreadKind = ThreadKind.COMMUNITY,
    author_id: Optional[UserId] = None,
    **overrides,
) -> Thread:
    """Build a thread with sensible defaults."""
    return Thread(
        id=ThreadId(uuid4()),
        kind=kind,
        author_id=author_id or new_user_id(),
        title=overrides.pop("title", "Weekend cleanup mission"),
        **overrides,
    )


def make_comment(
    thread_id: ThreadId,
    parent: Optional[Comment] = None,
    author_id: Optional[UserId] = None,
    minutes: int = 0,
    **overrides,
) -> Comment:
    """Build a comment (a reply when ``parent`` is given).

    ``minutes`` offsets created_at from a fixed base time so tests control
    ordering explicitly.
    """
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=overrides.pop("id", CommentId(uuid4())),
        thread_id=thread_id,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        author_id=author_id or new_user_id(),
        author_name=overrides.pop("author_name", "tester"),
        parent_author_id=parent.author_id if parent else None,
        content=overrides.pop("content", "<p>hello</p>"),
        created_at=created_at,
        updated_at=created_at,
        **overrides,
    )


def auth_headers(user_id: UserId, settings: AuthSettings | None = None) -> dict[str, str]:
    """Bearer header for ``user_id`` signed with the (test) auth settings."""
    token = create_token(str(user_id), settings or AuthSettings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with a test secret."""
    return AuthSettings(jwt_secret="test-secret")
