"""Practice session schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from filmroom.schemas.common import Timestamp
from filmroom.services.notes import Note

# =============================================================================
# Request Schemas
# =============================================================================


class SessionVideoIn(BaseModel):
    """One video inside a session, as sent by the client."""

    id: str = Field(..., min_length=1)
    name: str = ""
    note: str | None = None
    note_timestamp: Timestamp = Field(default=None, alias="noteTimestamp")
    notes: list[Note] | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CreateSessionRequest(BaseModel):
    """Request body for creating (and activating) a session."""

    label: str = ""
    videos: list[SessionVideoIn] = Field(default_factory=list)


class UpdateSessionRequest(BaseModel):
    """Request body for PATCH /sessions/{id}.

    Either ``videos`` (bulk replace) or ``videoId`` + ``note`` (legacy
    single-note edit).
    """

    videos: list[SessionVideoIn] | None = None
    video_id: str | None = Field(default=None, alias="videoId")
    note: str | None = None
    note_timestamp: Timestamp = Field(default=None, alias="noteTimestamp")

    model_config = ConfigDict(populate_by_name=True)


class VideoNoteRequest(BaseModel):
    """Request body for PATCH /sessions/{id}/video-note."""

    video_id: str = Field(..., min_length=1, alias="videoId")
    notes: list[Note] | None = None
    note: str | None = None
    note_timestamp: Timestamp = Field(default=None, alias="noteTimestamp")

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Response Schemas
# =============================================================================


class ActiveSessionOut(BaseModel):
    id: UUID
    label: str
    videos: list[dict[str, Any]]


class SessionOut(BaseModel):
    """A session with its presented videos."""

    id: UUID
    label: str
    videos: list[dict[str, Any]]
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
