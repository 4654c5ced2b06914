"""SQLAlchemy engine creation and configuration.

The engine is created once per process. Connection strings handed out by
the managed PostgreSQL store use the bare ``postgres://`` or
``postgresql://`` schemes; those are pinned to the psycopg (v3) driver.
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from filmroom.config import get_settings

_POSTGRES_DRIVERNAMES = ("postgres", "postgresql")


def normalize_database_url(database_url: str) -> str:
    """Pin bare PostgreSQL URLs to the psycopg driver.

    Examples:
        >>> normalize_database_url("postgres://u:p@db:5432/filmroom")
        'postgresql+psycopg://u:p@db:5432/filmroom'
        >>> normalize_database_url("sqlite://")
        'sqlite://'
    """
    url = make_url(database_url)
    if url.drivername in _POSTGRES_DRIVERNAMES:
        url = url.set(drivername="postgresql+psycopg")
    return url.render_as_string(hide_password=False)


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine with the given URL.

    Args:
        database_url: Store connection string. If None, uses settings.

    Returns:
        Configured SQLAlchemy engine. PostgreSQL engines get the pool
        size and recycle interval from settings.
    """
    settings = get_settings()
    url = normalize_database_url(database_url or settings.database_url)

    if not url.startswith("postgresql"):
        return create_engine(url, echo=False)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        pool_recycle=settings.db_pool_recycle_s,
        connect_args={"application_name": "filmroom"},
        echo=False,
    )


@lru_cache
def get_engine() -> Engine:
    """Get the cached database engine."""
    return create_db_engine()
