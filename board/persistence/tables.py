"""SQLAlchemy table definitions for board.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# THREADS TABLE (owned by the content domain; comments_count kept here)
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("kind", String(20), nullable=False, server_default="community"),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False, server_default=""),
    Column("comments_count", Integer, nullable=False, server_default="0"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("kind IN ('community', 'mission')", name="check_thread_kind"),
    CheckConstraint("comments_count >= 0", name="check_comments_count"),
    CheckConstraint("likes_count >= 0", name="check_thread_likes_count"),
)

# ============================================================================
# COMMENTS TABLE (flat; parent_id carries the whole tree shape)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "thread_id",
        UUID,
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # No foreign key: a hard-deleted parent may leave soft-deleted children
    Column("parent_id", UUID, nullable=True),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("author_id", UUID, nullable=True),
    Column("author_name", String(255), nullable=True),
    Column("parent_author_id", UUID, nullable=True),
    Column("content", Text, nullable=False),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("reports_count", Integer, nullable=False, server_default="0"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    # clock_timestamp() keeps creation times distinct within one transaction
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="clock_timestamp()",
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0", name="check_comment_depth"),
    CheckConstraint("likes_count >= 0", name="check_comment_likes_count"),
    CheckConstraint("reports_count >= 0", name="check_comment_reports_count"),
    CheckConstraint(
        "(parent_id IS NULL) = (depth = 0)", name="check_comment_root_depth"
    ),
)

Index(
    "idx_comments_thread_roots",
    comments_table.c.thread_id,
    comments_table.c.created_at,
    comments_table.c.id,
    postgresql_where=comments_table.c.parent_id.is_(None),
)
Index(
    "idx_comments_parent",
    comments_table.c.parent_id,
    comments_table.c.created_at,
)
Index(
    "idx_comments_thread_author",
    comments_table.c.thread_id,
    comments_table.c.author_id,
)

# ============================================================================
# LIKES TABLE (polymorphic target)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user_id", UUID, nullable=False),
    Column("target_type", String(20), nullable=False),
    Column("target_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="uq_likes_user_target"),
    CheckConstraint(
        "target_type IN ('comment', 'thread')", name="check_like_target_type"
    ),
)

Index("idx_likes_target", likes_table.c.target_type, likes_table.c.target_id)

# ============================================================================
# COMMENTED THREADS TABLE ("threads I've commented on")
# ============================================================================
commented_threads_table = Table(
    "commented_threads",
    metadata,
    Column("user_id", UUID, nullable=False),
    Column(
        "thread_id",
        UUID,
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "last_commented_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    PrimaryKeyConstraint("user_id", "thread_id", name="pk_commented_threads"),
)

Index(
    "idx_commented_threads_user_recent",
    commented_threads_table.c.user_id,
    commented_threads_table.c.last_commented_at.desc(),
)

# ============================================================================
# PROFILES TABLE (display names, written by the identity service)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("user_id", UUID, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
)
