"""Practice session routes.

Static routes (/sessions/active, /sessions/browse) are registered BEFORE
the dynamic /sessions/{session_id} routes.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from filmroom.api.deps import get_db
from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, requires
from filmroom.responses import ok_response
from filmroom.schemas.sessions import CreateSessionRequest, UpdateSessionRequest, VideoNoteRequest
from filmroom.services import sessions as sessions_service

router = APIRouter()


@router.get("/sessions/active")
def get_active_session(db: Annotated[Session, Depends(get_db)]) -> dict | None:
    """The active session, or null."""
    result = sessions_service.get_active(db)
    return result.model_dump(mode="json") if result else None


@router.get("/sessions/browse")
def browse_sessions(db: Annotated[Session, Depends(get_db)]) -> list[dict]:
    """Public listing of all sessions, newest first."""
    return [s.model_dump(mode="json") for s in sessions_service.list_browse(db)]


@router.get("/sessions")
def list_sessions(
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.AUTHENTICATED))],
    db: Annotated[Session, Depends(get_db)],
) -> list[dict]:
    result = sessions_service.list_sessions(db, viewer)
    return [s.model_dump(mode="json") for s in result]


@router.post("/sessions", status_code=201)
def create_session(
    body: CreateSessionRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Create a session and make it the only active one. Captain only."""
    return sessions_service.create_session(db, viewer, body).model_dump(mode="json")


@router.patch("/sessions/{session_id}")
def update_session(
    session_id: UUID,
    body: UpdateSessionRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.AUTHENTICATED))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Replace the video list, or set one video's note (captain only)."""
    return sessions_service.update_session(db, viewer, session_id, body).model_dump(mode="json")


@router.patch("/sessions/{session_id}/video-note")
def update_video_note(
    session_id: UUID,
    body: VideoNoteRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    sessions_service.update_video_notes(db, viewer, session_id, body)
    return ok_response()
