"""SQLAlchemy ORM models for Filmroom.

Defines all database tables using SQLAlchemy 2.x declarative patterns.
Enums are defined as Python enums and mapped to PostgreSQL enum types.

Embedded documents (session videos, notes, article blocks) are stored as
JSONB on PostgreSQL and plain JSON elsewhere. Writers always assign a new
list to these columns; in-place mutation is not tracked.
"""

from datetime import UTC, datetime
from enum import Enum as PyEnum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Text,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

JsonDocument = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware current time used for row timestamps."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# =============================================================================
# Enums
# =============================================================================


class UserRole(str, PyEnum):
    """Roles carried by session tokens and user rows."""

    captain = "captain"
    contributor = "contributor"


class VideoType(str, PyEnum):
    """Hosting provider of a reference video."""

    drive = "drive"
    youtube = "youtube"


# =============================================================================
# Models
# =============================================================================


class User(Base):
    """Registered contributor account.

    The captain is not a row; captain login uses the shared password.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        default=UserRole.contributor,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class PracticeSession(Base):
    """A practice session: a labelled, ordered collection of review videos."""

    __tablename__ = "sessions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    label: Mapped[str] = mapped_column(Text, nullable=False)
    videos: Mapped[list[dict[str, Any]]] = mapped_column(
        JsonDocument, default=list, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_sessions_created_at", "created_at"),)


class Comment(Base):
    """A timestamped comment on a session or reference video. Never mutated."""

    __tablename__ = "comments"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    session_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("sessions.id", ondelete="SET NULL"), nullable=True
    )
    video_id: Mapped[str] = mapped_column(Text, nullable=False)
    video_title: Mapped[str] = mapped_column(Text, nullable=False)
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    comment_text: Mapped[str] = mapped_column(Text, nullable=False)
    send_to_captain: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_comments_video_id_created_at", "video_id", "created_at"),
        Index("ix_comments_session_id", "session_id"),
    )


class ReferenceFolder(Base):
    """Folder in the captain-curated reference library."""

    __tablename__ = "reference_folders"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("reference_folders.id", ondelete="CASCADE"), nullable=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_reference_folders_parent_id", "parent_id"),)


class ReferenceVideo(Base):
    """Always-available reference video, optionally filed in a folder."""

    __tablename__ = "reference_videos"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[VideoType] = mapped_column(Enum(VideoType, name="video_type"), nullable=False)
    video_ref: Mapped[str] = mapped_column(Text, nullable=False)
    # Legacy single note, superseded by notes
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    note_timestamp: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[list[dict[str, Any]] | None] = mapped_column(JsonDocument, nullable=True)
    folder_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("reference_folders.id", ondelete="SET NULL"), nullable=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_reference_videos_folder_id", "folder_id"),)


class Article(Base):
    """Mixed text/video document, draft until published."""

    __tablename__ = "articles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    blocks: Mapped[list[dict[str, Any]]] = mapped_column(
        JsonDocument, default=list, nullable=False
    )
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    folder_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("reference_folders.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_articles_updated_at", "updated_at"),)
