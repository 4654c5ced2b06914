"""Test helpers for authentication and seeding.

Provides:
- Session cookie minting for captain and contributor viewers
- User creation
"""

from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from filmroom.auth.passwords import hash_password
from filmroom.auth.tokens import COOKIE_NAME, TokenClaims, issue_token
from filmroom.db.models import User, UserRole

TEST_AUTH_SECRET = "test-secret-that-is-long-enough-for-hs256"
TEST_CAPTAIN_PASSWORD = "captain-pass"
TEST_INVITE_CODE = "SAIL2026"


def captain_cookies() -> dict[str, str]:
    token = issue_token(TokenClaims(role=UserRole.captain.value, user_name="Captain"))
    return {COOKIE_NAME: token}


def contributor_cookies(user_id: UUID | None = None, user_name: str = "Ada") -> dict[str, str]:
    """Cookie for a contributor. A random user id is used if none is given."""
    token = issue_token(
        TokenClaims(
            role=UserRole.contributor.value,
            user_id=user_id or uuid4(),
            user_name=user_name,
        )
    )
    return {COOKIE_NAME: token}


def create_user(
    db: Session,
    username: str = "ada",
    display_name: str = "Ada",
    password: str = "pw-123456",
) -> User:
    """Insert a contributor row and commit it."""
    user = User(
        username=username,
        display_name=display_name,
        password_hash=hash_password(password, rounds=4),
        role=UserRole.contributor,
    )
    db.add(user)
    db.commit()
    return user
