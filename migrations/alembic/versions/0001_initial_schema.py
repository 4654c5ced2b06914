"""Initial schema - users, sessions, comments, reference library, articles

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Embedded documents (session videos, notes, article blocks) are JSONB.
There is no uniqueness constraint on sessions.is_active: exclusivity is
kept by the single UPDATE that activates a session.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    # Enable pgcrypto extension for gen_random_uuid()
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    user_role = postgresql.ENUM("captain", "contributor", name="user_role")
    video_type = postgresql.ENUM("drive", "youtube", name="video_type")
    user_role.create(op.get_bind(), checkfirst=True)
    video_type.create(op.get_bind(), checkfirst=True)

    # ==========================================================================
    # users table
    # ==========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(name="user_role", create_type=False),
            server_default="contributor",
            nullable=False,
        ),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        # Usernames are stored lowercased
        sa.CheckConstraint("username = lower(username)", name="ck_users_username_lowercase"),
    )

    # ==========================================================================
    # sessions table
    # ==========================================================================
    op.create_table(
        "sessions",
        _id_column(),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column(
            "videos",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), server_default="false", nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sessions_created_at", "sessions", ["created_at"])

    # ==========================================================================
    # comments table
    # ==========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("session_id", sa.UUID(), nullable=True),
        sa.Column("video_id", sa.Text(), nullable=False),
        sa.Column("video_title", sa.Text(), nullable=False),
        sa.Column("author_name", sa.Text(), nullable=False),
        sa.Column("timestamp_seconds", sa.Integer(), nullable=True),
        sa.Column("comment_text", sa.Text(), nullable=False),
        sa.Column("send_to_captain", sa.Boolean(), server_default="false", nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "timestamp_seconds IS NULL OR timestamp_seconds >= 0",
            name="ck_comments_timestamp_non_negative",
        ),
    )
    op.create_index("ix_comments_video_id_created_at", "comments", ["video_id", "created_at"])
    op.create_index("ix_comments_session_id", "comments", ["session_id"])

    # ==========================================================================
    # reference_folders table
    # ==========================================================================
    op.create_table(
        "reference_folders",
        _id_column(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("sort_order", sa.Integer(), server_default="0", nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["reference_folders.id"], ondelete="CASCADE"),
        sa.CheckConstraint("parent_id IS NULL OR parent_id <> id", name="ck_folders_not_own_parent"),
    )
    op.create_index("ix_reference_folders_parent_id", "reference_folders", ["parent_id"])

    # ==========================================================================
    # reference_videos table
    # ==========================================================================
    op.create_table(
        "reference_videos",
        _id_column(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("type", postgresql.ENUM(name="video_type", create_type=False), nullable=False),
        sa.Column("video_ref", sa.Text(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("note_timestamp", sa.Integer(), nullable=True),
        sa.Column("notes", postgresql.JSONB(), nullable=True),
        sa.Column("folder_id", sa.UUID(), nullable=True),
        sa.Column("sort_order", sa.Integer(), server_default="0", nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["folder_id"], ["reference_folders.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_reference_videos_folder_id", "reference_videos", ["folder_id"])

    # ==========================================================================
    # articles table
    # ==========================================================================
    op.create_table(
        "articles",
        _id_column(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=True),
        sa.Column("author_name", sa.Text(), nullable=False),
        sa.Column(
            "blocks",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("is_published", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("folder_id", sa.UUID(), nullable=True),
        _created_at_column(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["folder_id"], ["reference_folders.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_articles_updated_at", "articles", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_articles_updated_at", table_name="articles")
    op.drop_table("articles")
    op.drop_index("ix_reference_videos_folder_id", table_name="reference_videos")
    op.drop_table("reference_videos")
    op.drop_index("ix_reference_folders_parent_id", table_name="reference_folders")
    op.drop_table("reference_folders")
    op.drop_index("ix_comments_session_id", table_name="comments")
    op.drop_index("ix_comments_video_id_created_at", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_sessions_created_at", table_name="sessions")
    op.drop_table("sessions")
    op.drop_table("users")

    sa.Enum(name="video_type").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
