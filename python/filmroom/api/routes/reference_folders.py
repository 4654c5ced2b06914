"""Reference folder routes. Reads are public; writes are captain-only."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from filmroom.api.deps import get_db
from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, requires
from filmroom.responses import ok_response
from filmroom.schemas.reference import CreateFolderRequest, UpdateFolderRequest
from filmroom.services import reference_folders as folders_service

router = APIRouter()


@router.get("/reference-folders")
def list_folders(db: Annotated[Session, Depends(get_db)]) -> list[dict]:
    return [f.model_dump(mode="json") for f in folders_service.list_folders(db)]


@router.post("/reference-folders", status_code=201)
def create_folder(
    body: CreateFolderRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    return folders_service.create_folder(db, viewer, body).model_dump(mode="json")


@router.patch("/reference-folders/{folder_id}")
def update_folder(
    folder_id: UUID,
    body: UpdateFolderRequest,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Rename, re-describe, reorder or move a folder."""
    return folders_service.update_folder(db, viewer, folder_id, body).model_dump(mode="json")


@router.delete("/reference-folders/{folder_id}")
def delete_folder(
    folder_id: UUID,
    viewer: Annotated[Viewer | None, Depends(requires(AccessTier.CAPTAIN))],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Delete a folder with its subfolders. Contents become unfiled."""
    folders_service.delete_folder(db, viewer, folder_id)
    return ok_response()
