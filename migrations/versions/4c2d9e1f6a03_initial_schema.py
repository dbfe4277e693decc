"""initial_schema

Create the comment board schema:
- Threads (community and mission posts; only counters and lock state live here)
- Comments (flat storage, parent_id + depth carry the tree shape)
- Likes (one per user per target, polymorphic target)
- Commented threads (per-user "threads I've commented on")
- Profiles (author display names, written by the identity service)

Revision ID: 4c2d9e1f6a03
Revises:
Create Date: 2026-10-19 09:12:44.318502

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c2d9e1f6a03"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # THREADS table
    # ========================================================================
    op.create_table(
        "threads",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "kind", sa.String(20), nullable=False, server_default="community"
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False, server_default=""),
        sa.Column("comments_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "kind IN ('community', 'mission')", name="check_thread_kind"
        ),
        sa.CheckConstraint("comments_count >= 0", name="check_comments_count"),
        sa.CheckConstraint("likes_count >= 0", name="check_thread_likes_count"),
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        # No foreign key: a hard-deleted parent may leave soft-deleted children
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("author_id", sa.UUID(), nullable=True),
        sa.Column("author_name", sa.String(255), nullable=True),
        sa.Column("parent_author_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reports_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("clock_timestamp()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["thread_id"], ["threads.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="check_comment_depth"),
        sa.CheckConstraint("likes_count >= 0", name="check_comment_likes_count"),
        sa.CheckConstraint(
            "reports_count >= 0", name="check_comment_reports_count"
        ),
        sa.CheckConstraint(
            "(parent_id IS NULL) = (depth = 0)", name="check_comment_root_depth"
        ),
    )
    op.create_index(
        "idx_comments_thread_roots",
        "comments",
        ["thread_id", "created_at", "id"],
        postgresql_where=sa.text("parent_id IS NULL"),
    )
    op.create_index("idx_comments_parent", "comments", ["parent_id", "created_at"])
    op.create_index(
        "idx_comments_thread_author", "comments", ["thread_id", "author_id"]
    )

    # ========================================================================
    # LIKES table
    # ========================================================================
    op.create_table(
        "likes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("target_type", sa.String(20), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name="uq_likes_user_target"
        ),
        sa.CheckConstraint(
            "target_type IN ('comment', 'thread')", name="check_like_target_type"
        ),
    )
    op.create_index("idx_likes_target", "likes", ["target_type", "target_id"])

    # ========================================================================
    # COMMENTED_THREADS table
    # ========================================================================
    op.create_table(
        "commented_threads",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        sa.Column(
            "last_commented_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["thread_id"], ["threads.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "thread_id", name="pk_commented_threads"),
    )
    op.create_index(
        "idx_commented_threads_user_recent",
        "commented_threads",
        ["user_id", sa.text("last_commented_at DESC")],
    )

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("profiles")
    op.drop_index("idx_commented_threads_user_recent", table_name="commented_threads")
    op.drop_table("commented_threads")
    op.drop_index("idx_likes_target", table_name="likes")
    op.drop_table("likes")
    op.drop_index("idx_comments_thread_author", table_name="comments")
    op.drop_index("idx_comments_parent", table_name="comments")
    op.drop_index("idx_comments_thread_roots", table_name="comments")
    op.drop_table("comments")
    op.drop_table("threads")
