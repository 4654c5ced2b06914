"""Comment routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from filmroom.api.deps import get_db
from filmroom.auth.middleware import Viewer, get_optional_viewer
from filmroom.schemas.comments import CreateCommentRequest
from filmroom.services import comments as comments_service

router = APIRouter()


@router.get("/comments")
def list_comments(
    viewer: Annotated[Viewer | None, Depends(get_optional_viewer)],
    db: Annotated[Session, Depends(get_db)],
    video_id: Annotated[str | None, Query(alias="videoId")] = None,
    session_id: Annotated[UUID | None, Query(alias="sessionId")] = None,
    captain_only: Annotated[bool, Query(alias="captainOnly")] = False,
) -> list[dict]:
    """List comments oldest first. captainOnly=true requires the captain."""
    result = comments_service.list_comments(
        db, viewer, video_id=video_id, session_id=session_id, captain_only=captain_only
    )
    return [c.model_dump(mode="json") for c in result]


@router.post("/comments", status_code=201)
def create_comment(
    body: CreateCommentRequest,
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Post a comment. Open to anonymous callers."""
    return comments_service.create_comment(db, body).model_dump(mode="json")
