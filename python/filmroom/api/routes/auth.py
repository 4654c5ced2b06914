"""Login, registration, logout and the current viewer."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from filmroom.api.deps import get_db
from filmroom.auth.middleware import Viewer, get_optional_viewer
from filmroom.auth.tokens import clear_session_cookie, issue_token, set_session_cookie
from filmroom.responses import ok_response
from filmroom.schemas.auth import LoginOut, LoginRequest, RegisterRequest
from filmroom.services import users as users_service

router = APIRouter()


@router.post("/auth/login")
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Exchange credentials for a session cookie.

    A blank username logs in as the captain with the shared password.
    """
    claims = users_service.login(db, body)
    set_session_cookie(response, issue_token(claims))
    out = LoginOut(role=claims.role, user_name=claims.user_name or "")
    return out.model_dump(mode="json", by_alias=True)


@router.post("/auth/register", status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Create a contributor account. Requires the invite code."""
    users_service.register(db, body)
    return ok_response()


@router.post("/auth/logout")
def logout(response: Response) -> dict:
    clear_session_cookie(response)
    return ok_response()


@router.get("/auth/me")
def me(viewer: Annotated[Viewer | None, Depends(get_optional_viewer)]) -> dict:
    """The viewer identified by the session cookie, or 401."""
    return users_service.describe_viewer(viewer).model_dump(mode="json", by_alias=True)
