"""Comment domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from board.config import CommentSettings
from board.domain.error import ForbiddenError, NotFoundError, ValidationError
from board.domain.model.comment import Comment
from board.domain.model.common import utc_now
from board.domain.model.like import LikeToggleResult
from board.domain.model.listing import CommentListing, CommentView, PageInfo
from board.domain.model.profile import Profile
from board.domain.model.thread import Thread
from board.domain.repository import (
    LikeRepository,
    ThreadRepository,
    Transaction,
    TransactionManager,
)
from board.domain.value import (
    CommentId,
    DeletionOutcome,
    LikeTargetType,
    ThreadId,
    UserId,
)
from board.util.sanitize import plain_text, sanitize_content

from .base import Service
from .counter_ledger import CounterLedger
from .deletion_policy import DeletionPolicy
from .notification import NotificationService
from .pagination import PaginationEngine
from .profile_directory import ProfileService


class CommentService(Service):
    """Domain service for threaded comments.

    Writes run as single transactions through the transaction manager.
    Listing uses plain reads and is enriched best-effort: a failing profile
    or like lookup degrades the response, it never fails it.
    """

    def __init__(
        self,
        thread_repository: ThreadRepository,
        like_repository: LikeRepository,
        transaction_manager: TransactionManager,
        pagination_engine: PaginationEngine,
        counter_ledger: CounterLedger,
        deletion_policy: DeletionPolicy,
        profile_service: ProfileService,
        notification_service: NotificationService,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            thread_repository: Thread repository (reads)
            like_repository: Like repository (viewer like lookups)
            transaction_manager: Runs the mutating operations
            pagination_engine: Root pagination and reply grouping
            counter_ledger: Counter deltas for create and like toggles
            deletion_policy: Soft/hard delete decision
            profile_service: Author display resolution
            notification_service: Background notifications
            settings: Comment settings
        """
        self.thread_repository = thread_repository
        self.like_repository = like_repository
        self.transaction_manager = transaction_manager
        self.pagination_engine = pagination_engine
        self.counter_ledger = counter_ledger
        self.deletion_policy = deletion_policy
        self.profile_service = profile_service
        self.notification_service = notification_service
        self.settings = settings

    async def create_comment(
        self,
        thread_id: ThreadId,
        author_id: UserId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a root comment or a reply.

        Args:
            thread_id: Thread to comment on
            author_id: Verified author
            content: Rich text content (sanitized before storage)
            parent_id: Comment being replied to (None for a root comment)

        Returns:
            The created comment

        Raises:
            ValidationError: Empty content, locked thread or parent, or a
                parent from another thread
            NotFoundError: Unknown thread or parent
        """
        with logfire.span(
            "comment_service.create_comment",
            thread_id=str(thread_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            sanitized = self._clean(content)
            author = (await self.profile_service.resolve([author_id]))[author_id]

            async def work(tx: Transaction):
                thread = await self._get_thread(tx.threads, thread_id)
                if thread.is_locked:
                    raise ValidationError("Thread is locked")

                parent = None
                depth = 0
                if parent_id is not None:
                    parent = await tx.comments.find_by_id(parent_id)
                    if parent is None:
                        logfire.warn(
                            "Parent comment not found",
                            parent_id=str(parent_id),
                            thread_id=str(thread_id),
                        )
                        raise NotFoundError("Comment", str(parent_id))
                    if parent.thread_id != thread_id:
                        logfire.warn(
                            "Parent comment does not belong to thread",
                            parent_id=str(parent_id),
                            parent_thread_id=str(parent.thread_id),
                            target_thread_id=str(thread_id),
                        )
                        raise ValidationError(
                            "Parent comment does not belong to this thread"
                        )
                    if parent.is_locked:
                        raise ValidationError("Parent comment is locked")
                    depth = parent.depth + 1

                now = utc_now()
                comment = Comment(
                    id=CommentId(uuid4()),
                    thread_id=thread_id,
                    parent_id=parent_id,
                    depth=depth,
                    author_id=author_id,
                    author_name=author.name,
                    parent_author_id=parent.author_id if parent else None,
                    content=sanitized,
                    created_at=now,
                    updated_at=now,
                )
                saved = await tx.comments.save(comment)
                comments_count = await self.counter_ledger.record_created(tx, saved)
                return thread, parent, saved, comments_count

            thread, parent, saved, comments_count = await self.transaction_manager.run(
                work
            )
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                thread_id=str(thread_id),
                depth=saved.depth,
                comments_count=comments_count,
            )

            self.notification_service.comment_created(thread, saved, parent)
            return saved

    async def list_comments(
        self,
        thread_id: ThreadId,
        viewer_id: Optional[UserId] = None,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> CommentListing:
        """List a page of root comments with their replies.

        Args:
            thread_id: Thread to list
            viewer_id: Viewer for is_liked / is_mine flags (None when anonymous)
            cursor: ``next_cursor`` of the previous page
            page_size: Roots per page

        Returns:
            The page, enriched for the viewer

        Raises:
            NotFoundError: Unknown thread
            ValidationError: Malformed cursor or page_size below 1
        """
        with logfire.span(
            "comment_service.list_comments",
            thread_id=str(thread_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            thread = await self._get_thread(self.thread_repository, thread_id)
            page = await self.pagination_engine.fetch_page(thread, cursor, page_size)

            shown: list[Comment] = list(page.roots)
            for root in page.roots:
                shown.extend(page.replies.get(root.id, []))

            liked = await self._liked_comment_ids(viewer_id, [c.id for c in shown])
            profiles = await self.profile_service.resolve(
                c.author_id for c in shown if not c.is_deleted
            )

            def view(comment: Comment, **extra) -> CommentView:
                return CommentView(
                    comment=comment,
                    author=self._display_author(comment, profiles),
                    is_liked=comment.id in liked,
                    is_mine=viewer_id is not None and comment.author_id == viewer_id,
                    is_thread_author=comment.author_id is not None
                    and comment.author_id == thread.author_id,
                    **extra,
                )

            roots = [
                view(
                    root,
                    replies=[view(reply) for reply in page.replies.get(root.id, [])],
                    replies_count=page.replies_count.get(root.id, 0),
                )
                for root in page.roots
            ]
            return CommentListing(
                thread_id=thread_id,
                roots=roots,
                page_info=PageInfo(
                    page_size=page.page_size,
                    has_next=page.has_next,
                    next_cursor=page.next_cursor,
                ),
            )

    async def update_comment(
        self, comment_id: CommentId, author_id: UserId, content: str
    ) -> Comment:
        """Replace a comment's content.

        Args:
            comment_id: Comment to edit
            author_id: Verified requester (must be the author)
            content: New rich text content

        Returns:
            The updated comment

        Raises:
            NotFoundError: Unknown comment
            ForbiddenError: Requester is not the author
            ValidationError: Deleted or locked comment, or empty content
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            author_id=str(author_id),
        ):
            sanitized = self._clean(content)

            async def work(tx: Transaction) -> Comment:
                comment = await self._get_comment(tx, comment_id)
                if comment.is_deleted:
                    raise ValidationError("Cannot edit a deleted comment")
                if comment.author_id != author_id:
                    logfire.warn(
                        "Unauthorized comment update attempt",
                        comment_id=str(comment_id),
                        author_id=str(author_id),
                    )
                    raise ForbiddenError("Comment", str(comment_id), str(author_id))
                if comment.is_locked:
                    raise ValidationError("Cannot edit a locked comment")

                updated = comment.model_copy(
                    update={"content": sanitized, "updated_at": utc_now()}
                )
                return await tx.comments.save(updated)

            saved = await self.transaction_manager.run(work)
            logfire.info("Comment updated", comment_id=str(comment_id))
            return saved

    async def delete_comment(
        self, comment_id: CommentId, author_id: UserId
    ) -> DeletionOutcome:
        """Delete a comment, soft or hard depending on its live replies.

        Args:
            comment_id: Comment to delete
            author_id: Verified requester (must be the author)

        Returns:
            Which delete path was taken

        Raises:
            NotFoundError: Unknown or already deleted comment
            ForbiddenError: Requester is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            author_id=str(author_id),
        ):

            async def work(tx: Transaction) -> DeletionOutcome:
                comment = await self._get_comment(tx, comment_id)
                if comment.is_deleted:
                    raise NotFoundError("Comment", str(comment_id))
                if comment.author_id != author_id:
                    logfire.warn(
                        "Unauthorized comment delete attempt",
                        comment_id=str(comment_id),
                        author_id=str(author_id),
                    )
                    raise ForbiddenError("Comment", str(comment_id), str(author_id))
                return await self.deletion_policy.apply(tx, comment)

            return await self.transaction_manager.run(work)

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> LikeToggleResult:
        """Like the comment, or remove the user's existing like.

        Args:
            comment_id: Comment to toggle
            user_id: Verified user

        Returns:
            Like state and count after the toggle

        Raises:
            NotFoundError: Unknown comment
            ValidationError: Deleted or locked comment
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):

            async def work(tx: Transaction):
                comment = await self._get_comment(tx, comment_id)
                if comment.is_deleted:
                    raise ValidationError("Cannot like a deleted comment")
                if comment.is_locked:
                    raise ValidationError("Cannot like a locked comment")
                result = await self.counter_ledger.toggle_comment_like(
                    tx, comment, user_id
                )
                return comment, result

            comment, result = await self.transaction_manager.run(work)
            logfire.info(
                "Comment like toggled",
                comment_id=str(comment_id),
                is_liked=result.is_liked,
                likes_count=result.likes_count,
            )

            if result.is_liked and comment.author_id != user_id:
                liker = (await self.profile_service.resolve([user_id]))[user_id]
                self.notification_service.comment_liked(comment, user_id, liker.name)
            return result

    def _clean(self, content: str) -> str:
        sanitized = sanitize_content(content)
        if not plain_text(sanitized):
            raise ValidationError("Comment content cannot be empty")
        return sanitized

    async def _get_thread(
        self, thread_repository: ThreadRepository, thread_id: ThreadId
    ) -> Thread:
        thread = await thread_repository.find_by_id(thread_id)
        if thread is None:
            logfire.warn("Thread not found", thread_id=str(thread_id))
            raise NotFoundError("Thread", str(thread_id))
        return thread

    async def _get_comment(self, tx: Transaction, comment_id: CommentId) -> Comment:
        comment = await tx.comments.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _liked_comment_ids(
        self, viewer_id: Optional[UserId], comment_ids: list[CommentId]
    ) -> set:
        """Which of ``comment_ids`` the viewer likes, chunked and best-effort."""
        if viewer_id is None or not comment_ids:
            return set()
        liked: set = set()
        batch = self.settings.filter_batch_size
        for start in range(0, len(comment_ids), batch):
            chunk = comment_ids[start : start + batch]
            try:
                liked |= await self.like_repository.find_liked_target_ids(
                    viewer_id, LikeTargetType.COMMENT, chunk
                )
            except Exception as e:
                logfire.warn(
                    "Like lookup failed, reporting as not liked",
                    viewer_id=str(viewer_id),
                    comments=len(chunk),
                    error=str(e),
                )
        return liked

    def _display_author(
        self, comment: Comment, profiles: dict[UserId, Profile]
    ) -> Profile:
        if comment.is_deleted or comment.author_id is None:
            return self.profile_service.unknown()
        profile = profiles.get(comment.author_id)
        if profile is None or (
            profile.name == self.profile_service.unknown_name and comment.author_name
        ):
            # Directory does not know the author; fall back to the name
            # captured when the comment was written
            return Profile(
                user_id=comment.author_id,
                name=comment.author_name or self.profile_service.unknown_name,
            )
        return profile
