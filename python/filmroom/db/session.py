"""Database session management and transaction helpers.

Provides:
- Request-scoped database sessions via get_db() dependency
- Transaction context manager for mutations
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from filmroom.db.engine import get_engine
from filmroom.errors import BackendError


def create_session_factory(engine: Any = None) -> sessionmaker[Session]:
    """Create a session factory bound to an engine.

    Args:
        engine: SQLAlchemy engine. If None, uses the default engine.

    Returns:
        Configured sessionmaker instance.
    """
    if engine is None:
        engine = get_engine()

    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


# Default session factory - created lazily
_SessionLocal: sessionmaker[Session] | None = None


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the default session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = create_session_factory()
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that provides a database session.

    Yields:
        A database session that is automatically closed after use.
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def store_error_message(exc: SQLAlchemyError) -> str:
    """Extract the driver's own message from a SQLAlchemy exception."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def transaction(db: Session) -> Generator[None, None, None]:
    """Context manager for database transactions.

    Commits on success, rolls back on exception. Store failures are
    re-raised as BackendError carrying the store's message; any other
    exception is re-raised unchanged after rollback.

    Usage:
        with transaction(db):
            db.add(...)
            db.execute(...)
        # Committed if no exception
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise BackendError(store_error_message(e)) from e
    except Exception:
        db.rollback()
        raise
