"""Reply tree reconstruction.

Comments only know their own ``parent_id``. The resolver rebuilds the
"which root does this reply belong to" relation on read, from an id-keyed
map of the comments fetched so far.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

import logfire

from board.domain.model.comment import Comment
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, ResolutionMode, ThreadId

from .base import Service


class ThreadResolver(Service):
    """Groups replies under the page's root comments."""

    def __init__(
        self, comment_repository: CommentRepository, filter_batch_size: int = 10
    ) -> None:
        """Initialize thread resolver.

        Args:
            comment_repository: Comment repository (plain, non-transactional reads)
            filter_batch_size: Maximum parent ids per children query
        """
        self.comment_repository = comment_repository
        self.filter_batch_size = filter_batch_size

    @staticmethod
    def find_root_id(
        comment: Comment, nodes: Mapping[CommentId, Comment]
    ) -> Optional[CommentId]:
        """Walk up the parent chain to the topmost ancestor.

        Args:
            comment: Comment to resolve
            nodes: Already fetched comments keyed by id

        Returns:
            The root comment id, or None when the chain is broken (an
            ancestor is missing from ``nodes``) or loops back on itself
        """
        visited = {comment.id}
        current = comment
        while current.parent_id is not None:
            parent_id = current.parent_id
            if parent_id in visited:
                logfire.warn(
                    "Cycle in comment parent chain",
                    comment_id=str(comment.id),
                    repeated_id=str(parent_id),
                )
                return None
            visited.add(parent_id)
            parent = nodes.get(parent_id)
            if parent is None:
                return None
            current = parent
        return current.id

    async def resolve(
        self,
        thread_id: ThreadId,
        roots: Sequence[Comment],
        mode: ResolutionMode,
    ) -> dict[CommentId, list[Comment]]:
        """Collect the replies of each root comment.

        Args:
            thread_id: Thread the roots belong to
            roots: Root comments of the current page
            mode: BOUNDED for direct replies only; UNBOUNDED or
                THREAD_SCAN for any depth

        Returns:
            Replies per root id, each list sorted by (created_at, id).
            Every root in ``roots`` has an entry.
        """
        with logfire.span(
            "thread_resolver.resolve",
            thread_id=str(thread_id),
            roots=len(roots),
            mode=mode.value,
        ):
            buckets: dict[CommentId, list[Comment]] = {root.id: [] for root in roots}
            if not roots:
                return buckets

            if mode is ResolutionMode.BOUNDED:
                dropped = await self._resolve_bounded(thread_id, buckets)
            elif mode is ResolutionMode.THREAD_SCAN:
                dropped = await self._resolve_thread_scan(thread_id, roots, buckets)
            else:
                dropped = await self._resolve_unbounded(thread_id, roots, buckets)

            if dropped:
                logfire.debug(
                    "Replies not grouped under a page root",
                    thread_id=str(thread_id),
                    dropped=dropped,
                )

            for replies in buckets.values():
                replies.sort(key=Comment.sort_key)
            return buckets

    async def _resolve_bounded(
        self, thread_id: ThreadId, buckets: dict[CommentId, list[Comment]]
    ) -> int:
        dropped = 0
        children = await self._find_children(list(buckets))
        for child in children:
            if child.thread_id != thread_id:
                continue
            # One hop: only the page roots are eligible buckets
            if child.parent_id in buckets:
                buckets[child.parent_id].append(child)
            else:
                dropped += 1
        return dropped

    async def _resolve_unbounded(
        self,
        thread_id: ThreadId,
        roots: Sequence[Comment],
        buckets: dict[CommentId, list[Comment]],
    ) -> int:
        nodes: dict[CommentId, Comment] = {root.id: root for root in roots}
        visited: set[CommentId] = set(nodes)
        discovered: list[Comment] = []

        frontier = list(nodes)
        while frontier:
            next_frontier: list[CommentId] = []
            for child in await self._find_children(frontier):
                if child.thread_id != thread_id or child.id in visited:
                    continue
                visited.add(child.id)
                nodes[child.id] = child
                discovered.append(child)
                next_frontier.append(child.id)
            frontier = next_frontier

        dropped = 0
        for reply in discovered:
            root_id = self.find_root_id(reply, nodes)
            if root_id is not None and root_id in buckets:
                buckets[root_id].append(reply)
            else:
                dropped += 1
        return dropped

    async def _resolve_thread_scan(
        self,
        thread_id: ThreadId,
        roots: Sequence[Comment],
        buckets: dict[CommentId, list[Comment]],
    ) -> int:
        replies = await self.comment_repository.find_replies(thread_id)
        nodes: dict[CommentId, Comment] = {root.id: root for root in roots}
        nodes.update((reply.id, reply) for reply in replies)

        # Replies under roots of other pages stop at a missing ancestor too,
        # so they are counted with the broken chains
        dropped = 0
        for reply in replies:
            root_id = self.find_root_id(reply, nodes)
            if root_id is not None and root_id in buckets:
                buckets[root_id].append(reply)
            else:
                dropped += 1
        return dropped

    async def _find_children(self, parent_ids: list[CommentId]) -> list[Comment]:
        """Children of ``parent_ids``, queried in filter-sized chunks."""
        children: list[Comment] = []
        for start in range(0, len(parent_ids), self.filter_batch_size):
            chunk = parent_ids[start : start + self.filter_batch_size]
            children.extend(await self.comment_repository.find_children(chunk))
        return children
