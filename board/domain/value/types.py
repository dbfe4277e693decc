"""Domain value objects for board.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum


class ResolutionMode(str, Enum):
    """How replies are gathered and assigned to their root comment.

    BOUNDED fetches direct children of the page roots only (two-level
    views). UNBOUNDED expands breadth-first from the roots to arbitrary
    depth. THREAD_SCAN reads every reply of the thread in one query and
    walks each one up to its root.
    """

    BOUNDED = "bounded"
    UNBOUNDED = "unbounded"
    THREAD_SCAN = "thread_scan"


class ThreadKind(str, Enum):
    """Content domain a thread belongs to."""

    COMMUNITY = "community"
    MISSION = "mission"

    @property
    def resolution_mode(self) -> ResolutionMode:
        """Reply resolution strategy used for this kind of thread."""
        if self is ThreadKind.MISSION:
            return ResolutionMode.UNBOUNDED
        return ResolutionMode.THREAD_SCAN


class LikeTargetType(str, Enum):
    """Type of entity that can be liked."""

    COMMENT = "comment"
    THREAD = "thread"


class NotificationKind(str, Enum):
    """Notification categories sent by the comment core."""

    COMMENT = "comment"
    REPLY = "reply"
    COMMENT_LIKE = "comment_like"
    THREAD_LIKE = "thread_like"


class DeletionOutcome(str, Enum):
    """Terminal state reached by a delete request."""

    SOFT_DELETED = "soft_deleted"
    HARD_DELETED = "hard_deleted"
