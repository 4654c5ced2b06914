"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from filmroom.config import Environment, Settings


def _make_settings(**overrides) -> Settings:
    """Build a Settings instance with test defaults + overrides."""
    defaults = {
        "DATABASE_URL": "postgresql+psycopg://localhost/test",
        "FILMROOM_ENV": "test",
        "AUTH_SECRET": "secret",
        "CAPTAIN_PASSWORD": "captain",
        "INVITE_CODE": "SAIL2026",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


@pytest.fixture(autouse=True)
def _clear_settings_env(monkeypatch):
    """Only the explicit overrides below should feed Settings."""
    for name in (
        "AUTH_SECRET",
        "CAPTAIN_PASSWORD",
        "INVITE_CODE",
        "BCRYPT_ROUNDS",
        "DB_POOL_SIZE",
        "DB_POOL_RECYCLE_S",
    ):
        monkeypatch.delenv(name, raising=False)


class TestRequiredSettings:
    """Missing auth settings fail fast, all listed at once."""

    def test_all_present(self):
        s = _make_settings()
        assert s.filmroom_env == Environment.TEST
        assert s.bcrypt_rounds == 12

    def test_missing_secret_rejected(self):
        with pytest.raises(ValidationError, match="AUTH_SECRET"):
            _make_settings(AUTH_SECRET="")

    def test_all_missing_listed(self):
        with pytest.raises(ValidationError) as exc:
            _make_settings(AUTH_SECRET="", CAPTAIN_PASSWORD="", INVITE_CODE="")
        message = str(exc.value)
        assert "AUTH_SECRET" in message
        assert "CAPTAIN_PASSWORD" in message
        assert "INVITE_CODE" in message


class TestTuning:
    def test_bcrypt_rounds_floor(self):
        with pytest.raises(ValidationError, match="BCRYPT_ROUNDS"):
            _make_settings(BCRYPT_ROUNDS=3)

    def test_sheet_timeout_must_be_positive(self):
        with pytest.raises(ValidationError, match="SHEET_FETCH_TIMEOUT_S"):
            _make_settings(SHEET_FETCH_TIMEOUT_S=0)

    def test_pool_defaults_and_floor(self):
        s = _make_settings()
        assert s.db_pool_size == 5
        assert s.db_pool_recycle_s == 300
        with pytest.raises(ValidationError, match="DB_POOL_SIZE"):
            _make_settings(DB_POOL_SIZE=0)


class TestSecureCookies:
    @pytest.mark.parametrize(
        "env,secure", [("local", False), ("test", False), ("staging", True), ("prod", True)]
    )
    def test_secure_only_when_deployed(self, env, secure):
        assert _make_settings(FILMROOM_ENV=env).secure_cookies is secure
