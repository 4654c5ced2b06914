"""Database module for Filmroom.

Provides engine creation, session management, transaction helpers, and ORM models.
"""

from filmroom.db.engine import create_db_engine, get_engine
from filmroom.db.models import (
    Article,
    Base,
    Comment,
    PracticeSession,
    ReferenceFolder,
    ReferenceVideo,
    User,
    UserRole,
    VideoType,
)
from filmroom.db.session import get_db, transaction

__all__ = [
    # Engine and session
    "create_db_engine",
    "get_engine",
    "get_db",
    "transaction",
    # Base
    "Base",
    # Enums
    "UserRole",
    "VideoType",
    # Models
    "User",
    "PracticeSession",
    "Comment",
    "ReferenceFolder",
    "ReferenceVideo",
    "Article",
]
