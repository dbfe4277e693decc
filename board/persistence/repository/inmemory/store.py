"""Shared in-memory state behind the in-memory repositories."""

import asyncio
from datetime import datetime, timedelta
from typing import Any, Optional

from board.domain.model import Comment, CommentedThread, Like, Profile, Thread
from board.domain.value import CommentId, LikeId, ThreadId, UserId


class InMemoryStore:
    """Dict-backed document store.

    Repositories built on the same store see each other's writes, which is
    what lets a transaction span comments, threads, likes and aggregates.
    """

    def __init__(self) -> None:
        self.threads: dict[ThreadId, Thread] = {}
        self.comments: dict[CommentId, Comment] = {}
        self.likes: dict[LikeId, Like] = {}
        self.commented_threads: dict[tuple[UserId, ThreadId], CommentedThread] = {}
        self.profiles: dict[UserId, Profile] = {}
        self.lock = asyncio.Lock()
        self._last_created_at: Optional[datetime] = None

    def next_created_at(self, proposed: datetime) -> datetime:
        """Creation timestamp strictly after every one handed out before."""
        if self._last_created_at is not None and proposed <= self._last_created_at:
            proposed = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = proposed
        return proposed

    def snapshot(self) -> dict[str, Any]:
        """Copy of every collection (models are immutable, so shallow is enough)."""
        return {
            "threads": dict(self.threads),
            "comments": dict(self.comments),
            "likes": dict(self.likes),
            "commented_threads": dict(self.commented_threads),
            "profiles": dict(self.profiles),
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Roll every collection back to ``snapshot``."""
        self.threads = snapshot["threads"]
        self.comments = snapshot["comments"]
        self.likes = snapshot["likes"]
        self.commented_threads = snapshot["commented_threads"]
        self.profiles = snapshot["profiles"]
