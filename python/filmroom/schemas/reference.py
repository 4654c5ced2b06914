"""Reference library schemas: videos and folders."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from filmroom.schemas.common import OptionalRef, OptionalText, Timestamp
from filmroom.services.notes import Note

VideoTypeValue = Literal["drive", "youtube"]

# =============================================================================
# Request Schemas
# =============================================================================


class CreateReferenceVideoRequest(BaseModel):
    """Request body for adding a reference video.

    ``video_ref`` may be a bare provider id or a share URL.
    """

    title: str = ""
    type: VideoTypeValue
    video_ref: str = ""
    note: str | None = None
    note_timestamp: Timestamp = None
    notes: list[Note] | None = None
    folder_id: OptionalRef = None
    sort_order: int = 0


class UpdateReferenceVideoRequest(BaseModel):
    """Partial update of a reference video.

    Only fields present in the body are applied. ``noteTimestamp`` is the
    legacy camelCase key still sent by older clients.
    """

    title: str | None = None
    type: VideoTypeValue | None = None
    video_ref: str | None = None
    note: str | None = None
    note_timestamp: Timestamp = Field(default=None, alias="noteTimestamp")
    notes: list[Note] | None = None
    folder_id: OptionalRef = None
    sort_order: int | None = None

    model_config = ConfigDict(populate_by_name=True)


class CreateFolderRequest(BaseModel):
    """Request body for creating a reference folder."""

    name: str = ""
    description: OptionalText = None
    parent_id: OptionalRef = None
    sort_order: int = 0


class UpdateFolderRequest(BaseModel):
    """Partial update of a reference folder."""

    name: str | None = None
    description: OptionalText = None
    parent_id: OptionalRef = None
    sort_order: int | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class ReferenceVideoOut(BaseModel):
    """A reference video with its notes normalized to the array form."""

    id: UUID
    title: str
    type: VideoTypeValue
    video_ref: str
    note_timestamp: int | None
    notes: list[Note]
    folder_id: UUID | None
    sort_order: int
    thumbnail_url: str
    created_at: datetime


class FolderOut(BaseModel):
    id: UUID
    name: str
    description: str | None
    parent_id: UUID | None
    sort_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
