"""Reference video service layer.

Reads are public; every mutation is captain-only. Notes are always written
in the array form and the legacy note columns are cleared on write.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, authorize
from filmroom.db.models import ReferenceFolder, ReferenceVideo, VideoType
from filmroom.db.session import transaction
from filmroom.errors import ApiErrorCode, InvalidRequestError, NotFoundError
from filmroom.logging import get_logger
from filmroom.schemas.reference import (
    CreateReferenceVideoRequest,
    ReferenceVideoOut,
    UpdateReferenceVideoRequest,
)
from filmroom.services import media_links
from filmroom.services.notes import Note, normalize_notes, note_documents

logger = get_logger(__name__)


def _video_to_out(video: ReferenceVideo) -> ReferenceVideoOut:
    return ReferenceVideoOut(
        id=video.id,
        title=video.title,
        type=video.type.value,
        video_ref=video.video_ref,
        note_timestamp=video.note_timestamp,
        notes=normalize_notes(video.note, video.note_timestamp, video.notes),
        folder_id=video.folder_id,
        sort_order=video.sort_order,
        thumbnail_url=media_links.thumbnail_url(video.type.value, video.video_ref),
        created_at=video.created_at,
    )


def resolve_video_ref(video_type: str, raw: str) -> tuple[str, int | None]:
    """Provider id (and any YouTube start offset) from an id or share URL.

    Raises:
        InvalidRequestError: Nothing usable could be extracted.
    """
    value = raw.strip()
    if video_type == VideoType.youtube.value:
        video_id = media_links.extract_youtube_id(value)
        start = media_links.extract_youtube_start(value) if video_id and video_id != value else None
    else:
        video_id = media_links.extract_drive_file_id(value)
        start = None

    if not video_id:
        raise InvalidRequestError(ApiErrorCode.E_INVALID_VIDEO_REF, "Invalid video reference")
    return video_id, start


def _require_folder(db: Session, folder_id: UUID | None) -> None:
    if folder_id is not None and db.get(ReferenceFolder, folder_id) is None:
        raise NotFoundError(ApiErrorCode.E_FOLDER_NOT_FOUND, "Folder not found")


def _get_video(db: Session, video_id: UUID) -> ReferenceVideo:
    video = db.get(ReferenceVideo, video_id)
    if video is None:
        raise NotFoundError(ApiErrorCode.E_VIDEO_NOT_FOUND, "Video not found")
    return video


def list_reference_videos(db: Session) -> list[ReferenceVideoOut]:
    """All reference videos ordered by sort_order, then created_at."""
    rows = db.scalars(
        select(ReferenceVideo).order_by(
            ReferenceVideo.sort_order.asc(), ReferenceVideo.created_at.asc()
        )
    )
    return [_video_to_out(v) for v in rows]


def create_reference_video(
    db: Session, viewer: Viewer | None, request: CreateReferenceVideoRequest
) -> ReferenceVideoOut:
    """Add a video to the reference library."""
    authorize(viewer, AccessTier.CAPTAIN)

    title = request.title.strip()
    if not title or not request.video_ref.strip():
        raise InvalidRequestError(message="Missing required fields")

    video_ref, url_start = resolve_video_ref(request.type, request.video_ref)
    _require_folder(db, request.folder_id)

    note_timestamp = request.note_timestamp if request.note_timestamp is not None else url_start
    if request.notes is not None:
        notes = request.notes
    else:
        notes = normalize_notes(request.note, note_timestamp, None)

    with transaction(db):
        video = ReferenceVideo(
            title=title,
            type=VideoType(request.type),
            video_ref=video_ref,
            note=None,
            note_timestamp=note_timestamp,
            notes=note_documents(notes),
            folder_id=request.folder_id,
            sort_order=request.sort_order,
        )
        db.add(video)

    logger.info("reference_video_created", video_id=str(video.id), type=request.type)
    return _video_to_out(video)


def update_reference_video(
    db: Session, viewer: Viewer | None, video_id: UUID, request: UpdateReferenceVideoRequest
) -> ReferenceVideoOut:
    """Apply the fields present in a partial update.

    Raises:
        InvalidRequestError: Empty body, blank title, or bad video_ref.
        NotFoundError: Unknown video or target folder.
    """
    authorize(viewer, AccessTier.CAPTAIN)

    fields = request.model_fields_set
    if not fields:
        raise InvalidRequestError(message="No fields to update")

    video = _get_video(db, video_id)

    if "title" in fields:
        title = (request.title or "").strip()
        if not title:
            raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Title is required")

    video_type = request.type if "type" in fields and request.type else video.type.value
    video_ref = None
    if "video_ref" in fields:
        video_ref, _ = resolve_video_ref(video_type, request.video_ref or "")

    if "folder_id" in fields:
        _require_folder(db, request.folder_id)

    with transaction(db):
        if "title" in fields:
            video.title = title
        if "type" in fields and request.type:
            video.type = VideoType(request.type)
        if video_ref is not None:
            video.video_ref = video_ref
        if "folder_id" in fields:
            video.folder_id = request.folder_id
        if "sort_order" in fields and request.sort_order is not None:
            video.sort_order = request.sort_order
        if "note_timestamp" in fields:
            video.note_timestamp = request.note_timestamp

        if "notes" in fields or "note" in fields:
            _write_notes(video, request, fields)

    logger.info("reference_video_updated", video_id=str(video_id), fields=sorted(fields))
    return _video_to_out(video)


def _write_notes(
    video: ReferenceVideo, request: UpdateReferenceVideoRequest, fields: set[str]
) -> None:
    """Fold the request's notes (array or legacy pair) into the array column."""
    if "notes" in fields:
        notes = request.notes or []
    elif request.note and request.note.strip():
        notes = [Note(text=request.note, timestamp=request.note_timestamp)]
    else:
        notes = []
    video.notes = note_documents(notes)
    video.note = None


def delete_reference_video(db: Session, viewer: Viewer | None, video_id: UUID) -> None:
    """Remove a video from the library."""
    authorize(viewer, AccessTier.CAPTAIN)
    video = _get_video(db, video_id)
    with transaction(db):
        db.delete(video)
    logger.info("reference_video_deleted", video_id=str(video_id))
