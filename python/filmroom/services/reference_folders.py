"""Reference folder service layer.

Folders form a tree through parent_id. Deleting a folder deletes its whole
subtree; videos and articles filed anywhere in it become unfiled.
"""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from filmroom.auth.middleware import Viewer
from filmroom.auth.permissions import AccessTier, authorize
from filmroom.db.models import Article, ReferenceFolder, ReferenceVideo
from filmroom.db.session import transaction
from filmroom.errors import ApiErrorCode, InvalidRequestError, NotFoundError
from filmroom.logging import get_logger
from filmroom.schemas.reference import CreateFolderRequest, FolderOut, UpdateFolderRequest

logger = get_logger(__name__)


def _get_folder(db: Session, folder_id: UUID) -> ReferenceFolder:
    folder = db.get(ReferenceFolder, folder_id)
    if folder is None:
        raise NotFoundError(ApiErrorCode.E_FOLDER_NOT_FOUND, "Folder not found")
    return folder


def subtree_ids(db: Session, root_id: UUID) -> set[UUID]:
    """Ids of a folder and all of its descendants."""
    found = {root_id}
    frontier = [root_id]
    while frontier:
        children = db.scalars(
            select(ReferenceFolder.id).where(ReferenceFolder.parent_id.in_(frontier))
        ).all()
        frontier = [c for c in children if c not in found]
        found.update(frontier)
    return found


def list_folders(db: Session) -> list[FolderOut]:
    """All folders ordered by sort_order, then name."""
    rows = db.scalars(
        select(ReferenceFolder).order_by(ReferenceFolder.sort_order.asc(), ReferenceFolder.name.asc())
    )
    return [FolderOut.model_validate(f) for f in rows]


def create_folder(db: Session, viewer: Viewer | None, request: CreateFolderRequest) -> FolderOut:
    """Create a folder, optionally nested under a parent."""
    authorize(viewer, AccessTier.CAPTAIN)

    name = request.name.strip()
    if not name:
        raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Name is required")
    if request.parent_id is not None:
        _get_folder(db, request.parent_id)

    with transaction(db):
        folder = ReferenceFolder(
            name=name,
            description=request.description,
            parent_id=request.parent_id,
            sort_order=request.sort_order,
        )
        db.add(folder)

    logger.info("reference_folder_created", folder_id=str(folder.id))
    return FolderOut.model_validate(folder)


def update_folder(
    db: Session, viewer: Viewer | None, folder_id: UUID, request: UpdateFolderRequest
) -> FolderOut:
    """Apply a partial update.

    Raises:
        InvalidRequestError: Empty body, blank name, or a move that would
            create a cycle.
        NotFoundError: Unknown folder or parent.
    """
    authorize(viewer, AccessTier.CAPTAIN)

    fields = request.model_fields_set
    if not fields:
        raise InvalidRequestError(message="No fields to update")

    folder = _get_folder(db, folder_id)

    if "name" in fields:
        name = (request.name or "").strip()
        if not name:
            raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Name is required")

    if "parent_id" in fields and request.parent_id is not None:
        _get_folder(db, request.parent_id)
        if request.parent_id in subtree_ids(db, folder_id):
            raise InvalidRequestError(message="A folder cannot be moved into itself")

    with transaction(db):
        if "name" in fields:
            folder.name = name
        if "description" in fields:
            folder.description = request.description
        if "parent_id" in fields:
            folder.parent_id = request.parent_id
        if "sort_order" in fields and request.sort_order is not None:
            folder.sort_order = request.sort_order

    return FolderOut.model_validate(folder)


def delete_folder(db: Session, viewer: Viewer | None, folder_id: UUID) -> None:
    """Delete a folder and its descendants, unfiling their contents."""
    authorize(viewer, AccessTier.CAPTAIN)
    _get_folder(db, folder_id)

    ids = subtree_ids(db, folder_id)
    with transaction(db):
        db.execute(
            update(ReferenceVideo)
            .where(ReferenceVideo.folder_id.in_(ids))
            .values(folder_id=None)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            update(Article)
            .where(Article.folder_id.in_(ids))
            .values(folder_id=None)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(ReferenceFolder)
            .where(ReferenceFolder.id.in_(ids))
            .execution_options(synchronize_session=False)
        )

    db.expire_all()
    logger.info("reference_folder_deleted", folder_id=str(folder_id), subtree_size=len(ids))
