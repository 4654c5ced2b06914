"""Pytest configuration and fixtures for Filmroom tests.

Test isolation strategy:
- Every test gets a fresh in-memory SQLite database built from the ORM
  metadata (StaticPool keeps the single connection alive)
- The app's get_db dependency is overridden to use that database
- Auth settings come from environment variables set per test
- Authenticated clients carry a session cookie minted with issue_token
"""

from collections.abc import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from filmroom.app import add_request_id_middleware, create_app
from filmroom.config import clear_settings_cache
from filmroom.db.models import Base
from filmroom.db.session import create_session_factory, get_db
from tests.helpers import (
    TEST_AUTH_SECRET,
    TEST_CAPTAIN_PASSWORD,
    TEST_INVITE_CODE,
    captain_cookies,
    contributor_cookies,
)

TEST_DATABASE_URL = "sqlite+pysqlite://"


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Configure required settings for every test."""
    monkeypatch.setenv("FILMROOM_ENV", "test")
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("AUTH_SECRET", TEST_AUTH_SECRET)
    monkeypatch.setenv("CAPTAIN_PASSWORD", TEST_CAPTAIN_PASSWORD)
    monkeypatch.setenv("INVITE_CODE", TEST_INVITE_CODE)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with the full schema."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Session for seeding and inspecting data directly.

    Commit seeded rows before calling the API, and call expire_all()
    before reading rows the API has changed.
    """
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory: sessionmaker[Session]) -> FastAPI:
    """App with auth and request-id middleware, bound to the test database."""
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    add_request_id_middleware(app, log_requests=False)
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Anonymous client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def captain_client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Client carrying a captain session cookie."""
    with TestClient(app, cookies=captain_cookies()) as client:
        yield client


@pytest.fixture
def make_client(app: FastAPI) -> Generator[Callable[[dict[str, str]], TestClient], None, None]:
    """Factory for clients with arbitrary cookies; all are closed after the test."""
    clients: list[TestClient] = []

    def _make(cookies: dict[str, str]) -> TestClient:
        client = TestClient(app, cookies=cookies)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def contributor_client(make_client) -> TestClient:
    """Client carrying a contributor session cookie (no user row)."""
    return make_client(contributor_cookies())
