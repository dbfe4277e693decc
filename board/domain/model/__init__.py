"""Domain model entities for board."""

from board.domain.model.comment import Comment
from board.domain.model.commented_thread import CommentedThread
from board.domain.model.like import Like, LikeToggleResult
from board.domain.model.listing import CommentListing, CommentView, PageInfo
from board.domain.model.profile import Profile
from board.domain.model.thread import Thread

__all__ = [
    "Comment",
    "CommentedThread",
    "CommentListing",
    "CommentView",
    "Like",
    "LikeToggleResult",
    "PageInfo",
    "Profile",
    "Thread",
]
