"""Contributor accounts: registration and login.

The captain has no user row. Captain login compares the shared
CAPTAIN_PASSWORD; contributors log in with username + bcrypt password.
"""

import hmac

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filmroom.auth.middleware import Viewer
from filmroom.auth.passwords import hash_password, verify_password
from filmroom.auth.permissions import AccessTier, authorize
from filmroom.auth.tokens import TokenClaims
from filmroom.config import get_settings
from filmroom.db.models import User, UserRole
from filmroom.db.session import store_error_message
from filmroom.errors import (
    ApiErrorCode,
    BackendError,
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    UnauthenticatedError,
)
from filmroom.logging import get_logger
from filmroom.schemas.auth import LoginRequest, MeOut, RegisterRequest

logger = get_logger(__name__)

CAPTAIN_DISPLAY_NAME = "Captain"

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _invalid_credentials() -> UnauthenticatedError:
    return UnauthenticatedError(ApiErrorCode.E_INVALID_CREDENTIALS, "Invalid credentials")


def register(db: Session, request: RegisterRequest) -> None:
    """Create a contributor account.

    Check order: invite code, then required fields, then uniqueness.

    Raises:
        ForbiddenError: Wrong invite code.
        InvalidRequestError: Missing username/password or oversized password.
        ConflictError: Username already taken.
    """
    settings = get_settings()
    if not hmac.compare_digest(request.invite_code.encode(), settings.invite_code.encode()):  # type: ignore[union-attr]
        logger.info("registration_rejected", reason="invalid_invite")
        raise ForbiddenError(ApiErrorCode.E_INVALID_INVITE, "Invalid invite code")

    username = request.username.strip().lower()
    if not username or not request.password:
        raise InvalidRequestError(message="Username and password are required")
    if len(request.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidRequestError(message="Password is too long")

    display_name = (request.display_name or "").strip() or request.username.strip()

    if db.scalar(select(User.id).where(User.username == username)) is not None:
        raise ConflictError(ApiErrorCode.E_USERNAME_TAKEN, "Username already taken")

    user = User(
        username=username,
        display_name=display_name,
        password_hash=hash_password(request.password, rounds=settings.bcrypt_rounds),
        role=UserRole.contributor,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same name
        db.rollback()
        if db.scalar(select(User.id).where(User.username == username)) is not None:
            raise ConflictError(ApiErrorCode.E_USERNAME_TAKEN, "Username already taken") from e
        raise BackendError(store_error_message(e)) from e

    logger.info("user_registered", username=username)


def login(db: Session, request: LoginRequest) -> TokenClaims:
    """Check credentials and return the claims for a new session token.

    Raises:
        UnauthenticatedError: Credentials do not match.
    """
    username = (request.username or "").strip().lower()

    if not username:
        captain_password = get_settings().captain_password or ""
        if not request.password or not hmac.compare_digest(
            request.password.encode(), captain_password.encode()
        ):
            logger.info("login_failed", role=UserRole.captain.value)
            raise _invalid_credentials()
        logger.info("login_succeeded", role=UserRole.captain.value)
        return TokenClaims(role=UserRole.captain.value, user_name=CAPTAIN_DISPLAY_NAME)

    user = db.scalar(select(User).where(User.username == username))
    if user is None or not verify_password(request.password, user.password_hash):
        logger.info("login_failed", role=UserRole.contributor.value)
        raise _invalid_credentials()

    logger.info("login_succeeded", role=user.role.value, username=username)
    return TokenClaims(role=user.role.value, user_id=user.id, user_name=user.display_name)


def describe_viewer(viewer: Viewer | None) -> MeOut:
    """The signed-in viewer, or 401."""
    viewer = authorize(viewer, AccessTier.AUTHENTICATED)
    return MeOut(role=viewer.role, user_name=viewer.user_name, user_id=viewer.user_id)
