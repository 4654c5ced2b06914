"""Session tokens: mint and verify the signed cookie carried by every viewer.

- HS256 signed with AUTH_SECRET
- Claims: role, userId (optional), userName (optional), iat, exp=iat+7d
- Claims are signed, not encrypted
- Verification fails closed: any failure is reported as "no claims"
"""

import time
from dataclasses import dataclass
from uuid import UUID

import jwt
from fastapi import Response

from filmroom.config import get_settings
from filmroom.db.models import UserRole
from filmroom.logging import get_logger

logger = get_logger(__name__)

COOKIE_NAME = "tf_session"
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 60 * 60 * 24 * 7

VALID_ROLES = {role.value for role in UserRole}


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried inside a session token.

    Attributes:
        role: "captain" or "contributor".
        user_id: The contributor's user row id; None for the shared captain login.
        user_name: Display name shown as article author.
    """

    role: str
    user_id: UUID | None = None
    user_name: str | None = None


def _signing_key() -> str:
    # Settings validation guarantees the secret is present
    return get_settings().auth_secret  # type: ignore[return-value]


def issue_token(claims: TokenClaims, now: int | None = None) -> str:
    """Mint a signed session token for the given claims.

    Args:
        claims: Role and optional identity.
        now: Issue time in epoch seconds (defaults to the current time).

    Returns:
        Compact JWT string.
    """
    issued_at = int(time.time()) if now is None else now
    payload: dict = {
        "role": claims.role,
        "iat": issued_at,
        "exp": issued_at + TOKEN_TTL_SECONDS,
    }
    if claims.user_id is not None:
        payload["userId"] = str(claims.user_id)
    if claims.user_name is not None:
        payload["userName"] = claims.user_name

    return jwt.encode(payload, _signing_key(), algorithm=TOKEN_ALGORITHM)


def verify_token(token: str | None) -> TokenClaims | None:
    """Verify a session token.

    Checks signature, expiry and claim shape. Never raises.

    Args:
        token: The raw cookie value (may be None or empty).

    Returns:
        Decoded claims, or None on any failure.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            _signing_key(),
            algorithms=[TOKEN_ALGORITHM],
            options={"require": ["exp", "iat", "role"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("auth_failure", reason="expired_token")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("auth_failure", reason="invalid_token", error=str(e))
        return None

    role = payload.get("role")
    if role not in VALID_ROLES:
        logger.warning("auth_failure", reason="invalid_role")
        return None

    user_id = None
    raw_user_id = payload.get("userId")
    if raw_user_id is not None:
        try:
            user_id = UUID(str(raw_user_id))
        except ValueError:
            logger.warning("auth_failure", reason="invalid_user_id")
            return None

    user_name = payload.get("userName")
    if user_name is not None and not isinstance(user_name, str):
        return None

    return TokenClaims(role=role, user_id=user_id, user_name=user_name)


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session cookie to a response."""
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=TOKEN_TTL_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
        secure=get_settings().secure_cookies,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=get_settings().secure_cookies,
    )
