"""Authentication and authorization module.

This module provides:
- Session token minting/verification and cookie helpers
- Password hashing
- Auth middleware for FastAPI
- The access-tier authorization policy
"""

from filmroom.auth.middleware import AuthMiddleware, Viewer, get_optional_viewer
from filmroom.auth.permissions import AccessTier, authorize, requires
from filmroom.auth.tokens import COOKIE_NAME, TokenClaims, issue_token, verify_token

__all__ = [
    "AccessTier",
    "AuthMiddleware",
    "COOKIE_NAME",
    "TokenClaims",
    "Viewer",
    "authorize",
    "get_optional_viewer",
    "issue_token",
    "requires",
    "verify_token",
]
