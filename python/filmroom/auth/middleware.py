"""Authentication middleware for FastAPI.

Provides:
- AuthMiddleware: Global middleware that resolves the session cookie into a viewer
- get_optional_viewer: Dependency exposing the viewer (or None) to handlers
"""

from dataclasses import dataclass
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from filmroom.auth.tokens import COOKIE_NAME, TokenClaims, verify_token
from filmroom.db.models import UserRole
from filmroom.logging import set_viewer_context


@dataclass(frozen=True)
class Viewer:
    """Authenticated viewer identity.

    Attributes:
        role: "captain" or "contributor".
        user_id: Contributor user id (None for the shared captain login).
        user_name: Display name from the token.
    """

    role: str
    user_id: UUID | None = None
    user_name: str | None = None

    @property
    def is_captain(self) -> bool:
        return self.role == UserRole.captain.value

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "Viewer":
        return cls(role=claims.role, user_id=claims.user_id, user_name=claims.user_name)


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie on every request.

    Never rejects a request: an absent or invalid cookie leaves
    request.state.viewer as None and the route's access tier decides.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        claims = verify_token(request.cookies.get(COOKIE_NAME))

        if claims is None:
            request.state.viewer = None
        else:
            request.state.viewer = Viewer.from_claims(claims)
            set_viewer_context(claims.role, claims.user_name)

        return await call_next(request)


def get_optional_viewer(request: Request) -> Viewer | None:
    """FastAPI dependency returning the viewer, or None for anonymous callers."""
    return getattr(request.state, "viewer", None)

