"""Tests for database engine configuration."""

import pytest

from filmroom.config import clear_settings_cache
from filmroom.db.engine import create_db_engine, normalize_database_url


class TestNormalizeDatabaseUrl:
    @pytest.mark.parametrize(
        "raw",
        [
            "postgres://u:p@db.example.com:5432/filmroom",
            "postgresql://u:p@db.example.com:5432/filmroom",
            "postgresql+psycopg://u:p@db.example.com:5432/filmroom",
        ],
    )
    def test_postgres_urls_use_psycopg(self, raw):
        assert (
            normalize_database_url(raw) == "postgresql+psycopg://u:p@db.example.com:5432/filmroom"
        )

    def test_password_is_kept(self):
        assert ":s3cret@" in normalize_database_url("postgres://u:s3cret@db/filmroom")

    def test_other_drivers_untouched(self):
        assert normalize_database_url("sqlite+pysqlite://") == "sqlite+pysqlite://"


class TestCreateDbEngine:
    def test_postgres_pool_from_settings(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_SIZE", "3")
        monkeypatch.setenv("DB_POOL_RECYCLE_S", "120")
        clear_settings_cache()

        engine = create_db_engine("postgres://u:p@db.example.com:5432/filmroom")

        assert engine.url.drivername == "postgresql+psycopg"
        assert engine.pool.size() == 3
        assert engine.pool._recycle == 120
        engine.dispose()

    def test_sqlite_engine_skips_pool_tuning(self):
        engine = create_db_engine("sqlite+pysqlite://")

        assert engine.url.drivername == "sqlite+pysqlite"
        engine.dispose()
