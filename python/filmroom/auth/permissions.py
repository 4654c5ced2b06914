"""Authorization policy: the single source of truth for access checks.

Every route and service calls authorize() with the tier its operation needs.
The evaluation order is fixed:

    authenticate -> (fetch resource, for ownership checks) -> compare -> permit/deny

Failure mapping:
- no valid session where one is required -> UnauthenticatedError (401)
- valid session, insufficient privilege    -> ForbiddenError (403)

Ownership-gated mutations therefore call authorize() twice: once with
AUTHENTICATED before the resource lookup (so a missing cookie is a 401, not
a 404), then with CAPTAIN_OR_OWNER once the owner is known.
"""

from collections.abc import Callable
from enum import Enum
from typing import Annotated
from uuid import UUID

from fastapi import Depends

from filmroom.auth.middleware import Viewer, get_optional_viewer
from filmroom.errors import ApiErrorCode, ForbiddenError, UnauthenticatedError
from filmroom.logging import get_logger

logger = get_logger(__name__)


class AccessTier(str, Enum):
    """Access requirement of an operation."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    CAPTAIN = "captain"
    CAPTAIN_OR_OWNER = "captain_or_owner"


def authorize(
    viewer: Viewer | None,
    tier: AccessTier,
    owner_id: UUID | None = None,
) -> Viewer | None:
    """Permit or deny an operation.

    Args:
        viewer: The resolved viewer, or None for anonymous callers.
        tier: Required access tier.
        owner_id: Recorded owner of the resource (CAPTAIN_OR_OWNER only).
            A None owner never matches a viewer.

    Returns:
        The viewer (None only for PUBLIC).

    Raises:
        UnauthenticatedError: Tier needs a session and none was presented.
        ForbiddenError: Session present but not privileged enough.
    """
    if tier is AccessTier.PUBLIC:
        return viewer

    if viewer is None:
        raise UnauthenticatedError(message="Unauthorized")

    if tier is AccessTier.AUTHENTICATED:
        return viewer

    if viewer.is_captain:
        return viewer

    if tier is AccessTier.CAPTAIN_OR_OWNER and is_owner(viewer, owner_id):
        return viewer

    logger.info("authorization_denied", tier=tier.value, role=viewer.role)
    if tier is AccessTier.CAPTAIN:
        raise ForbiddenError(ApiErrorCode.E_CAPTAIN_REQUIRED, "Captain access required")
    raise ForbiddenError(message="Unauthorized")


def is_owner(viewer: Viewer | None, owner_id: UUID | None) -> bool:
    """True when the viewer is the recorded owner of a resource."""
    if viewer is None or viewer.user_id is None or owner_id is None:
        return False
    return viewer.user_id == owner_id


def can_read_draft(viewer: Viewer | None) -> bool:
    """Drafts are readable by any authenticated viewer.

    Anonymous callers get a masked 404 instead of a 401/403 so draft
    existence is not leaked.
    """
    return viewer is not None


def requires(tier: AccessTier) -> Callable[..., Viewer | None]:
    """Route dependency enforcing an access tier.

    FastAPI resolves dependencies before validating path and body
    parameters, so an anonymous write is a 401 even when its body or id is
    malformed. Services still call authorize() for their finer checks.
    """

    def dependency(
        viewer: Annotated[Viewer | None, Depends(get_optional_viewer)],
    ) -> Viewer | None:
        return authorize(viewer, tier)

    return dependency
