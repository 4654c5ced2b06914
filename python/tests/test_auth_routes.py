"""Tests for login, registration, logout and /me.

Covers the contributor onboarding flow end to end:
register with the invite code, log in, and read /me.
"""

import pytest
from sqlalchemy import select

from filmroom.auth.tokens import COOKIE_NAME, verify_token
from filmroom.db.models import User, UserRole
from tests.helpers import TEST_CAPTAIN_PASSWORD, TEST_INVITE_CODE, create_user


def _register(client, **overrides):
    body = {
        "inviteCode": TEST_INVITE_CODE,
        "username": "Ada",
        "displayName": "Ada L",
        "password": "pw-123456",
    }
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_then_login(self, client, db_session):
        response = _register(client)
        assert response.status_code == 201
        assert response.json() == {"ok": True}

        user = db_session.scalar(select(User).where(User.username == "ada"))
        assert user is not None
        assert user.display_name == "Ada L"
        assert user.role == UserRole.contributor
        assert user.password_hash != "pw-123456"

        login = client.post("/api/auth/login", json={"username": "ADA", "password": "pw-123456"})
        assert login.status_code == 200
        assert login.json() == {"ok": True, "role": "contributor", "userName": "Ada L"}

        claims = verify_token(login.cookies.get(COOKIE_NAME))
        assert claims is not None
        assert claims.user_id == user.id

    def test_wrong_invite_is_forbidden(self, client):
        response = _register(client, inviteCode="WRONG")

        assert response.status_code == 403
        assert response.json()["code"] == "E_INVALID_INVITE"

    def test_invite_checked_before_fields(self, client):
        response = _register(client, inviteCode="WRONG", username="", password="")

        assert response.status_code == 403

    @pytest.mark.parametrize("field", ["username", "password"])
    def test_missing_fields(self, client, field):
        response = _register(client, **{field: "  " if field == "username" else ""})

        assert response.status_code == 400
        assert response.json()["code"] == "E_INVALID_REQUEST"

    def test_display_name_defaults_to_username(self, client, db_session):
        response = _register(client, username="  Bo ", displayName=None)
        assert response.status_code == 201

        user = db_session.scalar(select(User).where(User.username == "bo"))
        assert user.display_name == "Bo"

    def test_duplicate_username_conflicts(self, client, db_session):
        create_user(db_session, username="ada")

        response = _register(client, username="ADA")

        assert response.status_code == 409
        assert response.json()["code"] == "E_USERNAME_TAKEN"


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_captain_login_sets_cookie(self, client):
        response = client.post("/api/auth/login", json={"password": TEST_CAPTAIN_PASSWORD})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "role": "captain", "userName": "Captain"}

        set_cookie = response.headers["set-cookie"]
        assert COOKIE_NAME in set_cookie
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        assert "Path=/" in set_cookie

    def test_blank_username_uses_captain_password(self, client):
        response = client.post("/api/auth/login", json={"username": "  ", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["code"] == "E_INVALID_CREDENTIALS"

    def test_wrong_password(self, client, db_session):
        create_user(db_session, username="ada", password="right-pw")

        response = client.post("/api/auth/login", json={"username": "ada", "password": "wrong"})

        assert response.status_code == 401
        assert COOKIE_NAME not in response.cookies

    def test_unknown_user(self, client):
        response = client.post("/api/auth/login", json={"username": "ghost", "password": "x"})

        assert response.status_code == 401


class TestMeAndLogout:
    """Tests for GET /api/auth/me and POST /api/auth/logout."""

    def test_me_requires_cookie(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "E_UNAUTHENTICATED"

    def test_me_after_login(self, client):
        client.post("/api/auth/login", json={"password": TEST_CAPTAIN_PASSWORD})

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json() == {"role": "captain", "userName": "Captain", "userId": None}

    def test_tampered_cookie_is_anonymous(self, make_client):
        client = make_client({COOKIE_NAME: "garbage.token.value"})

        assert client.get("/api/auth/me").status_code == 401

    def test_logout_clears_cookie(self, client):
        client.post("/api/auth/login", json={"password": TEST_CAPTAIN_PASSWORD})

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert client.get("/api/auth/me").status_code == 401
