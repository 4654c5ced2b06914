"""Reference video routes. Reads are public; writes are captain-only."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from filmroom.api.deps import get_db
from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, requires
from filmroom.responses import ok_response
from filmroom.schemas.reference import CreateReferenceVideoRequest, UpdateReferenceVideoRequest
from filmroom.services import reference_videos as reference_videos_service

router = APIRouter()


@router.get("/reference-videos")
def list_reference_videos(db: Annotated[Session, Depends(get_db)]) -> list[dict]:
    result = reference_videos_service.list_reference_videos(db)
    return [v.model_dump(mode="json") for v in result]


@router.post("/reference-videos", status_code=201)
def create_reference_video(
    body: CreateReferenceVideoRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Add a video by provider id or share URL."""
    result = reference_videos_service.create_reference_video(db, viewer, body)
    return result.model_dump(mode="json")


@router.patch("/reference-videos/{video_id}")
def update_reference_video(
    video_id: UUID,
    body: UpdateReferenceVideoRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    result = reference_videos_service.update_reference_video(db, viewer, video_id, body)
    return result.model_dump(mode="json")


@router.delete("/reference-videos/{video_id}")
def delete_reference_video(
    video_id: UUID,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    reference_videos_service.delete_reference_video(db, viewer, video_id)
    return ok_response()
