"""Practice session service layer.

Sessions are listed newest first. Exactly one session is active at a time:
creating a session activates it and deactivates every other one in the
same transaction (see activate_exclusively).
"""

from collections.abc import Callable
from typing import Any
from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session

from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, authorize
from filmroom.db.models import PracticeSession
from filmroom.db.session import transaction
from filmroom.errors import ApiErrorCode, InvalidRequestError, NotFoundError
from filmroom.logging import get_logger
from filmroom.schemas.sessions import (
    ActiveSessionOut,
    CreateSessionRequest,
    SessionOut,
    SessionVideoIn,
    UpdateSessionRequest,
    VideoNoteRequest,
)
from filmroom.services.notes import (
    Note,
    present_session_video,
    session_video_notes,
    write_session_video_notes,
)

logger = get_logger(__name__)


def _session_to_out(session: PracticeSession) -> SessionOut:
    return SessionOut(
        id=session.id,
        label=session.label,
        videos=[present_session_video(v) for v in session.videos or []],
        is_active=session.is_active,
        created_at=session.created_at,
    )


def _video_document(video: SessionVideoIn) -> dict[str, Any]:
    """Storage form of a client video: legacy note folded into notes."""
    doc: dict[str, Any] = {"id": video.id, "name": video.name}
    if video.notes is not None:
        return write_session_video_notes(doc, video.notes)
    if video.note and video.note.strip():
        return write_session_video_notes(doc, [Note(text=video.note, timestamp=video.note_timestamp)])
    return doc


def _get_session(db: Session, session_id: UUID) -> PracticeSession:
    session = db.get(PracticeSession, session_id)
    if session is None:
        raise NotFoundError(ApiErrorCode.E_SESSION_NOT_FOUND, "Session not found")
    return session


def activate_exclusively(db: Session, session_id: UUID) -> None:
    """Make session_id the only active session.

    One UPDATE over the whole table; callers run it inside the transaction
    that created or selected the session.
    """
    db.execute(
        update(PracticeSession)
        .values(is_active=case((PracticeSession.id == session_id, True), else_=False))
        .execution_options(synchronize_session=False)
    )


# =============================================================================
# Reads
# =============================================================================


def list_sessions(db: Session, viewer: Viewer | None) -> list[SessionOut]:
    """All sessions, newest first. Requires a session cookie."""
    authorize(viewer, AccessTier.AUTHENTICATED)
    rows = db.scalars(select(PracticeSession).order_by(PracticeSession.created_at.desc()))
    return [_session_to_out(s) for s in rows]


def list_browse(db: Session) -> list[SessionOut]:
    """Public browse listing, newest first."""
    rows = db.scalars(select(PracticeSession).order_by(PracticeSession.created_at.desc()))
    return [_session_to_out(s) for s in rows]


def get_active(db: Session) -> ActiveSessionOut | None:
    """The active session, or None when no session is active."""
    session = db.scalars(
        select(PracticeSession)
        .where(PracticeSession.is_active.is_(True))
        .order_by(PracticeSession.created_at.desc())
        .limit(1)
    ).first()
    if session is None:
        return None
    return ActiveSessionOut(
        id=session.id,
        label=session.label,
        videos=[present_session_video(v) for v in session.videos or []],
    )


# =============================================================================
# Writes
# =============================================================================


def create_session(db: Session, viewer: Viewer | None, request: CreateSessionRequest) -> SessionOut:
    """Create a session and make it the only active one.

    Raises:
        UnauthenticatedError: No session cookie.
        ForbiddenError: Caller is not the captain.
        InvalidRequestError: Blank label.
    """
    authorize(viewer, AccessTier.CAPTAIN)

    label = request.label.strip()
    if not label:
        raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Label is required")

    with transaction(db):
        session = PracticeSession(
            label=label,
            videos=[_video_document(v) for v in request.videos],
            is_active=True,
        )
        db.add(session)
        db.flush()
        activate_exclusively(db, session.id)

    db.refresh(session)
    logger.info("session_activated", session_id=str(session.id), video_count=len(session.videos))
    return _session_to_out(session)


def update_session(
    db: Session, viewer: Viewer | None, session_id: UUID, request: UpdateSessionRequest
) -> SessionOut:
    """Apply PATCH /sessions/{id}.

    ``videos`` replaces the video list and is open to any signed-in viewer.
    ``videoId`` + ``note`` is the legacy single-note edit and is captain-only.
    """
    if request.videos is not None:
        authorize(viewer, AccessTier.AUTHENTICATED)
        session = _get_session(db, session_id)
        with transaction(db):
            session.videos = [_video_document(v) for v in request.videos]
        logger.info("session_videos_replaced", session_id=str(session_id))
        return _session_to_out(session)

    if request.video_id is not None and "note" in request.model_fields_set:
        authorize(viewer, AccessTier.CAPTAIN)
        session = _get_session(db, session_id)
        notes = []
        if request.note and request.note.strip():
            notes = [Note(text=request.note, timestamp=request.note_timestamp)]
        with transaction(db):
            session.videos = _replace_video_notes(session, request.video_id, lambda _: notes)
        return _session_to_out(session)

    authorize(viewer, AccessTier.AUTHENTICATED)
    raise InvalidRequestError(message="Invalid body")


def update_video_notes(
    db: Session, viewer: Viewer | None, session_id: UUID, request: VideoNoteRequest
) -> None:
    """Replace or append the notes of one video in a session.

    ``notes`` replaces the list; otherwise a non-blank ``note`` is appended.
    """
    authorize(viewer, AccessTier.CAPTAIN)
    session = _get_session(db, session_id)

    if request.notes is not None:
        notes = request.notes

        def apply(_: list[Note]) -> list[Note]:
            return notes

    elif request.note and request.note.strip():
        added = Note(text=request.note, timestamp=request.note_timestamp)

        def apply(current: list[Note]) -> list[Note]:
            return [*current, added]

    else:
        raise InvalidRequestError(message="notes or note is required")

    with transaction(db):
        session.videos = _replace_video_notes(session, request.video_id, apply)

    logger.info("session_video_notes_updated", session_id=str(session_id), video_id=request.video_id)


def _replace_video_notes(
    session: PracticeSession, video_id: str, apply: Callable[[list[Note]], list[Note]]
) -> list[dict[str, Any]]:
    """New videos list with one video's notes rewritten; 404 if absent."""
    videos = list(session.videos or [])
    for index, video in enumerate(videos):
        if video.get("id") == video_id:
            videos[index] = write_session_video_notes(video, apply(session_video_notes(video)))
            return videos
    raise NotFoundError(ApiErrorCode.E_VIDEO_NOT_FOUND, "Video not found in session")
